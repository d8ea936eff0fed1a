import logging

from plyer import notification

logger = logging.getLogger(__name__)

TITLE = 'Sync status'
SUBTITLE = 'Synchronization'
IDLE_MESSAGE = 'Ready, waiting for changes'


def status_message(pending: int) -> str:
    if pending > 0:
        return f"Pending actions: {pending}"
    return IDLE_MESSAGE


class DesktopNotifier:
    """Fire-and-forget desktop notification; a missing backend is only logged."""

    def __init__(self, title: str = TITLE, subtitle: str = SUBTITLE):
        self._title = title
        self._subtitle = subtitle

    def notify(self, message: str):
        try:
            notification.notify(title=self._title, app_name=self._subtitle, message=message)
        except Exception as exc:
            logger.warning("Desktop notification failed (%s): %s", message, exc)
