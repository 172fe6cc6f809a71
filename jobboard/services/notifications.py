import logging

from jobboard.client import ApiClient, ApiError, parse_model
from jobboard.schemas import Notification, NotificationList

logger = logging.getLogger(__name__)

NOTIFICATIONS_PATH = "/notifications"
BELL_SIZE = 5


class NotificationService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self) -> NotificationList:
        envelope = await self.client.call("GET", NOTIFICATIONS_PATH)
        return parse_model(NotificationList, envelope.data or {})

    async def unread_count(self) -> int:
        envelope = await self.client.call("GET", f"{NOTIFICATIONS_PATH}/unread-count")
        data = envelope.data if isinstance(envelope.data, dict) else {}
        return int(data.get("unreadCount", data.get("count", 0)))

    async def mark_read(self, notification_id: int | str) -> None:
        await self.client.call("PUT", f"{NOTIFICATIONS_PATH}/{notification_id}/read")

    async def mark_all_read(self) -> None:
        await self.client.call("PUT", f"{NOTIFICATIONS_PATH}/read-all")

    async def delete(self, notification_id: int | str) -> None:
        await self.client.call("DELETE", f"{NOTIFICATIONS_PATH}/{notification_id}")


class NotificationCenter:
    """Local notification state with optimistic updates after each action.

    Failed actions leave local state unchanged and record ``last_error``.
    """

    def __init__(self, service: NotificationService):
        self.service = service
        self.notifications: list[Notification] = []
        self.unread_count = 0
        self.is_loading = False
        self.last_error: str | None = None

    @property
    def bell(self) -> list[Notification]:
        """The latest few notifications shown in the header dropdown."""
        return self.notifications[:BELL_SIZE]

    def filtered(self, which: str = "all") -> list[Notification]:
        if which == "unread":
            return [n for n in self.notifications if not n.is_read]
        if which == "read":
            return [n for n in self.notifications if n.is_read]
        return list(self.notifications)

    async def refresh(self) -> None:
        self.is_loading = True
        try:
            result = await self.service.list()
        except ApiError as e:
            logger.error("Fetch notifications error: %s", e.message)
            self.last_error = e.message
            return
        finally:
            self.is_loading = False

        self.notifications = result.notifications
        self.unread_count = result.unread_count
        self.last_error = None

    async def mark_read(self, notification_id: int | str) -> bool:
        try:
            await self.service.mark_read(notification_id)
        except ApiError as e:
            logger.error("Mark as read error: %s", e.message)
            self.last_error = e.message
            return False

        for i, notification in enumerate(self.notifications):
            if notification.id == notification_id and not notification.is_read:
                self.notifications[i] = notification.model_copy(update={"is_read": True})
                self.unread_count = max(0, self.unread_count - 1)
        return True

    async def mark_all_read(self) -> bool:
        try:
            await self.service.mark_all_read()
        except ApiError as e:
            logger.error("Mark all as read error: %s", e.message)
            self.last_error = e.message
            return False

        self.notifications = [n.model_copy(update={"is_read": True}) for n in self.notifications]
        self.unread_count = 0
        return True

    async def delete(self, notification_id: int | str) -> bool:
        try:
            await self.service.delete(notification_id)
        except ApiError as e:
            logger.error("Delete notification error: %s", e.message)
            self.last_error = e.message
            return False

        removed = [n for n in self.notifications if n.id == notification_id]
        self.notifications = [n for n in self.notifications if n.id != notification_id]
        if any(not n.is_read for n in removed):
            self.unread_count = max(0, self.unread_count - 1)
        return True
