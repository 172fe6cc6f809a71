"""Application context: wires the client, session and services together.

``lifespan`` is the one place the client is started and torn down::

    async with lifespan() as app:
        async with app.job_search() as search:
            await search.load()
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable

import httpx

from jobboard.client import ApiClient
from jobboard.config import Settings, get_settings
from jobboard.services import (
    ApplicationService,
    JobDetailController,
    JobSearchController,
    JobService,
    NotificationCenter,
    NotificationPoller,
    NotificationService,
    ProfileService,
    SessionManager,
)
from jobboard.storage import TokenStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass
class AppContext:
    settings: Settings
    client: ApiClient
    session: SessionManager
    jobs: JobService
    applications: ApplicationService
    notifications: NotificationCenter
    profile: ProfileService
    poller: NotificationPoller = field(repr=False)

    def job_search(self) -> JobSearchController:
        """A fresh search controller for one job list view."""
        return JobSearchController(self.jobs, self.settings)

    def job_detail(self) -> JobDetailController:
        return JobDetailController(self.session, self.jobs, self.applications)

    async def start_notifications(self) -> None:
        """Load notifications now and keep them fresh while signed in."""
        if not self.session.is_authenticated:
            return
        await self.notifications.refresh()
        if self.settings.notification_polling and not self.poller.running:
            self.poller.start()

    def stop_notifications(self) -> None:
        self.poller.shutdown()


@asynccontextmanager
async def lifespan(
    settings: Settings | None = None,
    on_redirect_to_login: Callable[[], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[AppContext]:
    settings = settings or get_settings()
    configure_logging(settings)

    token_store = TokenStore(settings.token_path)
    client = ApiClient(settings, token_store, transport=transport)
    session = SessionManager(client, token_store, on_redirect_to_login)
    center = NotificationCenter(NotificationService(client))
    app = AppContext(
        settings=settings,
        client=client,
        session=session,
        jobs=JobService(client),
        applications=ApplicationService(client),
        notifications=center,
        profile=ProfileService(client),
        poller=NotificationPoller(center, settings.notification_poll_seconds),
    )

    try:
        await session.initialize()
        await app.start_notifications()
        yield app
    finally:
        app.stop_notifications()
        await client.aclose()
        logger.info("Client shut down")
