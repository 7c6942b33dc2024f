from itertools import count

from ocr_client.logging.logger import Log
from ocr_client.notifications.base import BaseNotifier, Notification, Variant


class NotificationQueue(BaseNotifier):
    """In-memory list of pending notifications, mirrored to the log."""

    def __init__(self) -> None:
        self._ids = count(1)
        self._pending: list[Notification] = []

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def notify(self, message: str, variant: Variant = Variant.INFO) -> Notification:
        notification = Notification(id=next(self._ids), message=message, variant=variant)
        self._pending.append(notification)
        if variant is Variant.ERROR:
            Log.error(message)
        elif variant is Variant.WARNING:
            Log.warning(message)
        else:
            Log.info(message)
        return notification

    def dismiss(self, notification_id: int) -> None:
        self._pending = [n for n in self._pending if n.id != notification_id]
