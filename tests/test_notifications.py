"""Tests for notifications and the background poll."""

from unittest.mock import AsyncMock

import pytest
from apscheduler.triggers.interval import IntervalTrigger

from jobboard.client import ApiError, ErrorKind
from jobboard.schemas import Notification, NotificationList
from jobboard.services import NotificationCenter, NotificationPoller, NotificationService
from jobboard.services.scheduler import POLL_JOB_ID
from tests.conftest import SEEKER_EMAIL


@pytest.fixture
def seeded(backend):
    """Seven notifications for the job seeker, two of them already read."""
    for i in range(7):
        backend.add_notification(
            SEEKER_EMAIL,
            title=f"Update {i}",
            isRead=i < 2,
            relatedType="application",
            relatedId=100 + i,
        )
    return backend


@pytest.fixture
def center(api_client):
    return NotificationCenter(NotificationService(api_client))


class TestNotificationService:
    """Tests for the notification endpoints."""

    @pytest.mark.asyncio
    async def test_list(self, seeker_session, seeded, api_client):
        result = await NotificationService(api_client).list()
        assert len(result.notifications) == 7
        assert result.unread_count == 5
        assert result.notifications[0].title == "Update 6"

    @pytest.mark.asyncio
    async def test_unread_count(self, seeker_session, seeded, api_client):
        assert await NotificationService(api_client).unread_count() == 5

    @pytest.mark.asyncio
    async def test_requires_login(self, session, api_client):
        with pytest.raises(ApiError) as exc_info:
            await NotificationService(api_client).list()
        assert exc_info.value.kind is ErrorKind.AUTHENTICATION


class TestNotificationCenter:
    """Tests for local notification state."""

    @pytest.mark.asyncio
    async def test_refresh_and_bell(self, seeker_session, seeded, center):
        """The bell shows the latest five."""
        await center.refresh()
        assert len(center.notifications) == 7
        assert [n.title for n in center.bell] == [f"Update {i}" for i in range(6, 1, -1)]
        assert center.unread_count == 5
        assert center.last_error is None

    @pytest.mark.asyncio
    async def test_filtered(self, seeker_session, seeded, center):
        await center.refresh()
        assert len(center.filtered("unread")) == 5
        assert len(center.filtered("read")) == 2
        assert len(center.filtered("all")) == 7

    @pytest.mark.asyncio
    async def test_mark_read(self, seeker_session, seeded, center):
        await center.refresh()
        target = center.filtered("unread")[0]
        assert await center.mark_read(target.id) is True
        assert center.unread_count == 4
        assert all(n.is_read for n in center.notifications if n.id == target.id)

    @pytest.mark.asyncio
    async def test_mark_read_already_read_keeps_count(self, seeker_session, seeded, center):
        await center.refresh()
        target = center.filtered("read")[0]
        await center.mark_read(target.id)
        assert center.unread_count == 5

    @pytest.mark.asyncio
    async def test_mark_all_read(self, seeker_session, seeded, center):
        await center.refresh()
        assert await center.mark_all_read() is True
        assert center.unread_count == 0
        assert center.filtered("unread") == []

        await center.refresh()
        assert center.unread_count == 0

    @pytest.mark.asyncio
    async def test_delete_unread(self, seeker_session, seeded, center):
        await center.refresh()
        target = center.filtered("unread")[0]
        assert await center.delete(target.id) is True
        assert len(center.notifications) == 6
        assert center.unread_count == 4

    @pytest.mark.asyncio
    async def test_unread_count_never_negative(self):
        """Local count is floored at zero even if it drifted from the server."""
        service = AsyncMock(spec=NotificationService)
        center = NotificationCenter(service)
        center.notifications = [Notification(id=1, is_read=False)]
        center.unread_count = 0
        await center.mark_read(1)
        assert center.unread_count == 0

    @pytest.mark.asyncio
    async def test_refresh_failure_recorded(self):
        """A failed refresh keeps the old list and records the error."""
        service = AsyncMock(spec=NotificationService)
        service.list.return_value = NotificationList(notifications=[Notification(id=1)], unread_count=1)
        center = NotificationCenter(service)
        await center.refresh()

        service.list.side_effect = ApiError(ErrorKind.NETWORK, "Network error. Please check your connection.")
        await center.refresh()

        assert len(center.notifications) == 1
        assert center.last_error == "Network error. Please check your connection."
        assert center.is_loading is False

    @pytest.mark.asyncio
    async def test_failed_action_leaves_state(self):
        service = AsyncMock(spec=NotificationService)
        service.delete.side_effect = ApiError(ErrorKind.SERVER, "Server error. Please try again later.", 500)
        center = NotificationCenter(service)
        center.notifications = [Notification(id=1)]
        center.unread_count = 1

        assert await center.delete(1) is False
        assert len(center.notifications) == 1
        assert center.unread_count == 1


class TestNotificationPoller:
    """Tests for the periodic refresh job."""

    @pytest.mark.asyncio
    async def test_start_registers_interval_job(self):
        center = NotificationCenter(AsyncMock(spec=NotificationService))
        poller = NotificationPoller(center, interval_seconds=30)

        poller.start()
        try:
            assert poller.running is True
            job = poller.scheduler.get_job(POLL_JOB_ID)
            assert job is not None
            assert isinstance(job.trigger, IntervalTrigger)
            assert job.trigger.interval.total_seconds() == 30
        finally:
            poller.shutdown()

        assert poller.running is False

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_job(self):
        center = NotificationCenter(AsyncMock(spec=NotificationService))
        poller = NotificationPoller(center, interval_seconds=30)

        poller.start()
        poller.start()
        try:
            assert len(poller.scheduler.get_jobs()) == 1
        finally:
            poller.shutdown()

    def test_shutdown_without_start(self):
        """Stopping a poller that never started is harmless."""
        poller = NotificationPoller(NotificationCenter(AsyncMock(spec=NotificationService)))
        poller.shutdown()
        assert poller.running is False
