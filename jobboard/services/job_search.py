"""Job search controller: filters, pagination and debounced fetching.

Text edits are debounced so typing does not issue a request per keystroke;
submit, reset and page changes fetch immediately. Fetches can overlap, so each
one is tagged with a generation number and only the most recently issued fetch
is allowed to update the visible state.
"""
import asyncio
import logging
from typing import Any

from jobboard.client import ApiError
from jobboard.config import Settings, get_settings
from jobboard.schemas import JobFilters, JobSummary
from jobboard.services.jobs import JobService

logger = logging.getLogger(__name__)

# Filters may be named by attribute or by their query parameter name.
FILTER_NAMES = {field.alias: name for name, field in JobFilters.model_fields.items() if field.alias}


class JobSearchController:
    """State and actions behind the job list view. One instance per view mount."""

    def __init__(
        self,
        jobs: JobService,
        settings: Settings | None = None,
        *,
        page_size: int | None = None,
        debounce_seconds: float | None = None,
    ):
        settings = settings or get_settings()
        self.jobs = jobs
        self.page_size = page_size or settings.search_page_size
        self.debounce_seconds = (
            settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        )

        self.filters = JobFilters()
        self.page = 1
        self.total_count = 0
        self.total_pages = 0
        self.results: list[JobSummary] = []
        self.is_loading = False
        self.last_error: str | None = None

        self._generation = 0
        self._debounce: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def has_pending_search(self) -> bool:
        return self._debounce is not None

    async def load(self) -> None:
        """Initial fetch when the view mounts."""
        await self._fetch(self.page)

    def set_filter(self, field: str, value: Any) -> None:
        """Update one filter now and schedule a debounced search.

        The search reads the filters as they are when it fires, so edits to
        other fields made in the meantime are included.

        Raises:
            ValueError: if ``field`` is not a filter or ``value`` is invalid for it
        """
        name = FILTER_NAMES.get(field, field)
        if name not in JobFilters.model_fields:
            raise ValueError(f"Unknown filter: {field}")
        setattr(self.filters, name, value)

        self._cancel_debounce()
        loop = asyncio.get_running_loop()
        self._debounce = loop.call_later(self.debounce_seconds, self._fire_debounced)

    async def submit_search(self) -> None:
        """Search now with the current filters, skipping the debounce wait."""
        self._cancel_debounce()
        await self._fetch(1)

    async def reset_filters(self) -> None:
        self._cancel_debounce()
        self.filters = JobFilters()
        await self._fetch(1)

    async def go_to_page(self, page: int) -> None:
        """Fetch ``page``; ignored when outside 1..total_pages."""
        if not 1 <= page <= self.total_pages:
            logger.debug("Ignoring page %d (total pages: %d)", page, self.total_pages)
            return
        await self._fetch(page)

    async def next_page(self) -> None:
        await self.go_to_page(self.page + 1)

    async def previous_page(self) -> None:
        await self.go_to_page(self.page - 1)

    def close(self) -> None:
        """Cancel the pending debounce and any debounced fetch still running."""
        self._cancel_debounce()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    async def __aenter__(self) -> "JobSearchController":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _cancel_debounce(self) -> None:
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

    def _fire_debounced(self) -> None:
        self._debounce = None
        task = asyncio.get_running_loop().create_task(self._fetch(1))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, page: int) -> None:
        self._generation += 1
        generation = self._generation

        self.page = page
        self.is_loading = True
        params = {**self.filters.to_query_params(), "page": page, "limit": self.page_size}

        try:
            result = await self.jobs.list_jobs(params)
        except ApiError as e:
            if generation != self._generation:
                return
            logger.error("Error fetching jobs: %s", e.message)
            # Keep the previous results on screen rather than flashing an empty list.
            self.last_error = e.message
            self.is_loading = False
            return

        if generation != self._generation:
            logger.debug(
                "Discarding stale job page %d (generation %d, latest %d)",
                page, generation, self._generation,
            )
            return

        self.results = result.jobs
        self.total_count = result.total
        self.total_pages = result.pages
        self.last_error = None
        self.is_loading = False
        logger.debug("Loaded page %d/%d (%d jobs)", page, result.pages, result.total)
