from .base import WithCtime
from .id import NotificationID, UserID


class Notification(WithCtime):
    notification_id: NotificationID
    recipient_id: UserID
    title: str
    message: str
    related_id: str | None = None
    is_read: bool = False
