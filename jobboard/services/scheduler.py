import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from jobboard.services.notifications import NotificationCenter

logger = logging.getLogger(__name__)

POLL_JOB_ID = "notification_poll"


class NotificationPoller:
    """Refreshes a NotificationCenter on a fixed interval while a user is signed in.

    Must be started from inside a running event loop.
    """

    def __init__(
        self,
        center: NotificationCenter,
        interval_seconds: int = 30,
        scheduler: AsyncIOScheduler | None = None,
    ):
        self.center = center
        self.interval_seconds = interval_seconds
        self.scheduler = scheduler or AsyncIOScheduler()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        self.scheduler.add_job(
            self.center.refresh,
            IntervalTrigger(seconds=self.interval_seconds),
            id=POLL_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info("Notification polling started (every %ds)", self.interval_seconds)

    def shutdown(self) -> None:
        """Stop polling. Safe to call when the poller never started."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Notification polling stopped")
