"""Fire-and-forget delivery of user-visible notifications."""

from __future__ import annotations

from typing import Callable

from holiday_checker.domain.models import Notification, Severity
from holiday_checker.logging import logger

NotificationSink = Callable[[Notification], None]


class LoggingNotificationSink:
    """Sink that writes notifications to the structured log."""

    def __call__(self, notification: Notification) -> None:
        log = logger.error if notification.severity == "error" else logger.info
        log(
            "notification",
            title=notification.title,
            message=notification.message,
            severity=notification.severity,
        )


def dispatch(
    sink: NotificationSink | None,
    title: str,
    message: str,
    severity: Severity,
) -> None:
    """Deliver a notification without letting sink failures escape."""

    if sink is None:
        return
    notification = Notification(title=title, message=message, severity=severity)
    try:
        sink(notification)
    except Exception:
        logger.exception("notification_delivery_failed", title=title, severity=severity)


__all__ = ["LoggingNotificationSink", "NotificationSink", "dispatch"]
