"""Sender protocol for polynotify notification delivery.

Every sender declares the one notification kind it applies to and
delivers notifications of that kind.  The router guarantees a sender only
ever receives notifications of its declared kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from polynotify.models.notifications import NotificationBase, NotificationKind

if TYPE_CHECKING:
    from polynotify.config import NotifyConfig


class DeliveryError(RuntimeError):
    """Raised when a sender cannot complete delivery of a notification."""

    def __init__(self, message: str, notification_id: str = "") -> None:
        super().__init__(message)
        self.notification_id = notification_id


@runtime_checkable
class NotificationSender(Protocol):
    """Protocol that every notification sender must implement.

    Attributes
    ----------
    applies_to : NotificationKind
        The single notification kind this sender delivers.
    """

    @property
    def applies_to(self) -> NotificationKind:
        """Return the notification kind handled by this sender."""
        ...

    def send(self, notification: NotificationBase) -> None:
        """Deliver *notification*.

        Raises
        ------
        DeliveryError
            If the delivery side effect cannot complete.  The error is not
            retried; it propagates to whoever is dispatching.
        """
        ...


def default_senders(config: NotifyConfig | None = None) -> list[NotificationSender]:
    """Return the standard sender set, one per notification kind."""
    from polynotify.config import config as default_config
    from polynotify.senders.email import EmailNotificationSender
    from polynotify.senders.sms import SmsNotificationSender

    cfg = config or default_config
    return [
        EmailNotificationSender(sender_address=cfg.email_sender_address),
        SmsNotificationSender(sender_id=cfg.sms_sender_id),
    ]
