"""Notification store contract and a volatile in-memory implementation.

The dispatch layer only needs ``find_all()``: every persisted notification
across all variants, in a single call, each carrying its ``kind`` tag.
How a store recovers the variant (joins, discriminator column, separate
collections) is the store's own business.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from polynotify.models.notifications import NotificationBase

logger = logging.getLogger(__name__)


class StoreIntegrityError(RuntimeError):
    """Raised when stored notifications violate the data model."""


@runtime_checkable
class NotificationStore(Protocol):
    """Protocol every notification store must implement."""

    def persist(self, notification: NotificationBase) -> NotificationBase:
        """Store *notification* and return it."""
        ...

    def persist_all(
        self, notifications: Iterable[NotificationBase]
    ) -> list[NotificationBase]:
        """Store each notification in order, all or nothing.

        If any notification cannot be stored, none of the batch is kept.
        """
        ...

    def find_all(self) -> list[NotificationBase]:
        """Return every stored notification, of every variant, in insertion order."""
        ...

    def find_by_id(self, notification_id: str) -> NotificationBase | None:
        """Return the notification with *notification_id*, or ``None``."""
        ...

    def count(self) -> int:
        """Return the number of stored notifications."""
        ...


class InMemoryNotificationStore:
    """Dict-backed store for tests and single-process demos.

    Examples
    --------
    >>> from polynotify.models import SmsNotification
    >>> store = InMemoryNotificationStore()
    >>> _ = store.persist(SmsNotification(phone_number="012-345-67890"))
    >>> store.count()
    1
    """

    def __init__(self) -> None:
        self._notifications: dict[str, NotificationBase] = {}

    def persist(self, notification: NotificationBase) -> NotificationBase:
        self._check_new(notification, self._notifications)
        self._notifications[notification.notification_id] = notification
        logger.debug(
            "Stored %s notification %s",
            notification.kind.value,
            notification.notification_id,
        )
        return notification

    def persist_all(
        self, notifications: Iterable[NotificationBase]
    ) -> list[NotificationBase]:
        batch = list(notifications)
        seen = set(self._notifications)
        for notification in batch:
            self._check_new(notification, seen)
            seen.add(notification.notification_id)
        return [self.persist(n) for n in batch]

    def find_all(self) -> list[NotificationBase]:
        return list(self._notifications.values())

    def find_by_id(self, notification_id: str) -> NotificationBase | None:
        return self._notifications.get(notification_id)

    def count(self) -> int:
        return len(self._notifications)

    @staticmethod
    def _check_new(notification: NotificationBase, stored_ids) -> None:
        if notification.notification_id in stored_ids:
            raise StoreIntegrityError(
                f"Notification {notification.notification_id} is already stored."
            )
