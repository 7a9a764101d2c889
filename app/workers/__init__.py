"""Background workers."""

from app.workers.alert_notifier import AlertNotifier, alert_notifier

__all__ = [
    "AlertNotifier",
    "alert_notifier",
]
