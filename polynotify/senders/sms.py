"""SMS notification sender: builds SMS gateway payloads (stub).

Payloads go to an injected ``transport`` callable when one is given,
otherwise they wait in a buffer until ``flush()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from polynotify.models.notifications import (
    NotificationBase,
    NotificationKind,
    SmsNotification,
)
from polynotify.senders import DeliveryError

logger = logging.getLogger(__name__)


class SmsPayload(BaseModel):
    """A single SMS gateway request."""

    model_config = ConfigDict(frozen=True)

    notification_id: str
    phone_number: str
    recipient_name: str = ""
    sender_id: str


class SmsNotificationSender:
    """Delivers ``SmsNotification`` records.

    Parameters
    ----------
    sender_id:
        Alphanumeric sender id shown on the handset.
    transport:
        Optional callable receiving each ``SmsPayload``.
    """

    def __init__(
        self,
        sender_id: str = "POLYNOTIFY",
        transport: Callable[[SmsPayload], None] | None = None,
    ) -> None:
        self._sender_id = sender_id
        self._transport = transport
        self._pending_payloads: list[SmsPayload] = []

    @property
    def applies_to(self) -> NotificationKind:
        return NotificationKind.SMS

    def send(self, notification: NotificationBase) -> None:
        if not isinstance(notification, SmsNotification):
            raise DeliveryError(
                f"SmsNotificationSender cannot deliver {notification.kind.value} "
                f"notification {notification.notification_id}",
                notification_id=notification.notification_id,
            )

        logger.info(
            "Send SMS to %s %s via phone number: %s",
            notification.first_name,
            notification.last_name,
            notification.phone_number,
        )
        payload = SmsPayload(
            notification_id=notification.notification_id,
            phone_number=notification.phone_number,
            recipient_name=notification.recipient_name,
            sender_id=self._sender_id,
        )

        if self._transport is None:
            self._pending_payloads.append(payload)
            return

        try:
            self._transport(payload)
        except Exception as exc:
            raise DeliveryError(
                f"SMS delivery failed for notification "
                f"{notification.notification_id}: {exc}",
                notification_id=notification.notification_id,
            ) from exc

    def flush(self) -> list[SmsPayload]:
        """Return and clear all pending payloads."""
        payloads = list(self._pending_payloads)
        self._pending_payloads.clear()
        return payloads

    @property
    def pending_count(self) -> int:
        return len(self._pending_payloads)
