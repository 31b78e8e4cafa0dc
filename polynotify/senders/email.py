"""Email notification sender: builds email delivery payloads.

No SMTP traffic happens here.  Each payload is either handed to an
injected ``transport`` callable or buffered until ``flush()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from polynotify.models.notifications import (
    EmailNotification,
    NotificationBase,
    NotificationKind,
)
from polynotify.senders import DeliveryError

logger = logging.getLogger(__name__)


class EmailPayload(BaseModel):
    """An email ready for an SMTP transport."""

    model_config = ConfigDict(frozen=True)

    notification_id: str
    recipient: str
    recipient_name: str = ""
    sender: str


class EmailNotificationSender:
    """Delivers ``EmailNotification`` records.

    Parameters
    ----------
    sender_address:
        The From address.  Defaults to ``notifications@localhost``.
    transport:
        Optional callable receiving each ``EmailPayload``.  When omitted,
        payloads are buffered for ``flush()``.
    """

    def __init__(
        self,
        sender_address: str = "notifications@localhost",
        transport: Callable[[EmailPayload], None] | None = None,
    ) -> None:
        self._sender_address = sender_address
        self._transport = transport
        self._pending_payloads: list[EmailPayload] = []

    @property
    def applies_to(self) -> NotificationKind:
        return NotificationKind.EMAIL

    def send(self, notification: NotificationBase) -> None:
        if not isinstance(notification, EmailNotification):
            raise DeliveryError(
                f"EmailNotificationSender cannot deliver {notification.kind.value} "
                f"notification {notification.notification_id}",
                notification_id=notification.notification_id,
            )

        logger.info(
            "Send Email to %s %s via address: %s",
            notification.first_name,
            notification.last_name,
            notification.email_address,
        )
        payload = EmailPayload(
            notification_id=notification.notification_id,
            recipient=notification.email_address,
            recipient_name=notification.recipient_name,
            sender=self._sender_address,
        )

        if self._transport is None:
            self._pending_payloads.append(payload)
            return

        try:
            self._transport(payload)
        except Exception as exc:
            raise DeliveryError(
                f"Email delivery failed for notification "
                f"{notification.notification_id}: {exc}",
                notification_id=notification.notification_id,
            ) from exc

    def flush(self) -> list[EmailPayload]:
        """Return and clear all pending payloads."""
        payloads = list(self._pending_payloads)
        self._pending_payloads.clear()
        return payloads

    @property
    def pending_count(self) -> int:
        """Return the number of pending payloads."""
        return len(self._pending_payloads)
