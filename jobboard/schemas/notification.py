from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from jobboard.utils import notification_icon, time_ago


class Notification(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | str
    type: str = ""
    title: str = ""
    message: str = ""
    is_read: bool = Field(False, alias="isRead")
    related_type: str | None = Field(None, alias="relatedType")
    related_id: int | str | None = Field(None, alias="relatedId")
    created_at: datetime | None = Field(None, alias="createdAt")

    @property
    def link(self) -> str | None:
        """Route of the application or job this notification refers to."""
        if self.related_id is None:
            return None
        if self.related_type == "application":
            return f"/applications/{self.related_id}"
        if self.related_type == "job":
            return f"/jobs/{self.related_id}"
        return None

    @property
    def icon(self) -> str:
        return notification_icon(self.type)

    @property
    def age(self) -> str:
        return time_ago(self.created_at)


class NotificationList(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notifications: list[Notification] = Field(default_factory=list)
    unread_count: int = Field(0, alias="unreadCount")
