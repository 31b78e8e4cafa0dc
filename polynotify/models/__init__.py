"""polynotify data models: all Pydantic v2, all frozen (immutable)."""

from polynotify.models.campaign import Campaign, CampaignReport
from polynotify.models.notifications import (
    NOTIFICATION_MODELS,
    EmailNotification,
    Notification,
    NotificationBase,
    NotificationKind,
    SmsNotification,
    parse_notification,
)

__all__ = [
    # notifications
    "NotificationKind",
    "NotificationBase",
    "EmailNotification",
    "SmsNotification",
    "Notification",
    "NOTIFICATION_MODELS",
    "parse_notification",
    # campaign
    "Campaign",
    "CampaignReport",
]
