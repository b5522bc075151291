"""Notification sink that writes notifications to the application log."""

import logging
from dataclasses import dataclass, field

from food_inventory.domain.notifications import ERROR, WARNING, Notification
from food_inventory.services.notifications import NotificationSink

_LEVELS = {ERROR: logging.ERROR, WARNING: logging.WARNING}


@dataclass
class LoggingNotificationSink(NotificationSink):
    """Log each notification at a level matching its kind."""

    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("food_inventory.notifications")
    )

    def notify(self, notification: Notification) -> None:
        """Write the notification to the log."""
        self.logger.log(
            _LEVELS.get(notification.kind, logging.INFO),
            "%s: %s",
            notification.title,
            notification.message,
            extra={"notification_kind": notification.kind},
        )
