"""Shared test fixtures for polynotify."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from polynotify.core.notification_store import InMemoryNotificationStore
from polynotify.core.sqlite_store import SqliteNotificationStore
from polynotify.models.notifications import (
    EmailNotification,
    NotificationBase,
    NotificationKind,
    SmsNotification,
)


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test databases."""
    return tmp_path


@pytest.fixture
def memory_store() -> InMemoryNotificationStore:
    """Provide an empty in-memory store."""
    return InMemoryNotificationStore()


@pytest.fixture
def sqlite_store(tmp_dir: Path) -> SqliteNotificationStore:
    """Provide a fresh SqliteNotificationStore backed by a temp database."""
    return SqliteNotificationStore(tmp_dir / "test_notifications.db")


# ---------------------------------------------------------------------------
# Notification factories: shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_email() -> Callable[..., EmailNotification]:
    """Factory fixture: build an EmailNotification with sensible defaults."""

    def _factory(email_address: str = "vlad@acme.com", **overrides: Any) -> EmailNotification:
        defaults: dict[str, Any] = {
            "email_address": email_address,
            "first_name": "Vlad",
            "last_name": "Mihalcea",
        }
        defaults.update(overrides)
        return EmailNotification(**defaults)

    return _factory


@pytest.fixture
def make_sms() -> Callable[..., SmsNotification]:
    """Factory fixture: build an SmsNotification with sensible defaults."""

    def _factory(phone_number: str = "012-345-67890", **overrides: Any) -> SmsNotification:
        defaults: dict[str, Any] = {
            "phone_number": phone_number,
            "first_name": "Vlad",
            "last_name": "Mihalcea",
        }
        defaults.update(overrides)
        return SmsNotification(**defaults)

    return _factory


# ---------------------------------------------------------------------------
# Sender doubles
# ---------------------------------------------------------------------------


class RecordingSender:
    """A sender that remembers every notification it was given."""

    def __init__(self, kind: Any, calls: list[tuple[str, str]] | None = None) -> None:
        self._kind = kind
        self.received: list[NotificationBase] = []
        # Shared across senders to observe cross-sender ordering.
        self._calls = calls if calls is not None else []

    @property
    def applies_to(self) -> Any:
        return self._kind

    def send(self, notification: NotificationBase) -> None:
        self.received.append(notification)
        self._calls.append((str(self._kind), notification.notification_id))


@pytest.fixture
def make_sender() -> Callable[..., RecordingSender]:
    """Factory fixture: build a RecordingSender for a kind."""

    def _factory(
        kind: Any = NotificationKind.EMAIL,
        calls: list[tuple[str, str]] | None = None,
    ) -> RecordingSender:
        return RecordingSender(kind, calls)

    return _factory
