"""Notification store backed by SQLite, using joined-table inheritance.

Layout:
- ``notification`` holds the fields shared by every variant.
- One table per variant holds the variant's own fields.  Its primary key
  is also a foreign key to ``notification``.

``find_all()`` is a single polymorphic query: the base table is LEFT OUTER
JOINed to every variant table and a ``CASE`` expression recovers the kind
from whichever variant row is present.  A base row must have exactly one
variant row; anything else is reported as ``StoreIntegrityError``.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from polynotify.core.notification_store import StoreIntegrityError
from polynotify.models.notifications import (
    EmailNotification,
    NotificationBase,
    NotificationKind,
    SmsNotification,
    parse_notification,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_NOTIFICATION = """
CREATE TABLE IF NOT EXISTS notification (
    notification_id  TEXT PRIMARY KEY,
    first_name       TEXT NOT NULL DEFAULT '',
    last_name        TEXT NOT NULL DEFAULT '',
    created_on       TEXT NOT NULL
);
"""

_CREATE_EMAIL_NOTIFICATION = """
CREATE TABLE IF NOT EXISTS email_notification (
    notification_id  TEXT PRIMARY KEY
                     REFERENCES notification(notification_id) ON DELETE CASCADE,
    email_address    TEXT NOT NULL CHECK (email_address <> '')
);
"""

_CREATE_SMS_NOTIFICATION = """
CREATE TABLE IF NOT EXISTS sms_notification (
    notification_id  TEXT PRIMARY KEY
                     REFERENCES notification(notification_id) ON DELETE CASCADE,
    phone_number     TEXT NOT NULL CHECK (phone_number <> '')
);
"""

_SELECT_POLYMORPHIC = """
SELECT
    n.notification_id,
    n.first_name,
    n.last_name,
    n.created_on,
    e.email_address,
    s.phone_number,
    CASE WHEN e.notification_id IS NOT NULL THEN 'email'
         WHEN s.notification_id IS NOT NULL THEN 'sms'
    END AS kind,
    (e.notification_id IS NOT NULL) + (s.notification_id IS NOT NULL) AS variant_rows
FROM notification n
LEFT OUTER JOIN email_notification e ON n.notification_id = e.notification_id
LEFT OUTER JOIN sms_notification s ON n.notification_id = s.notification_id
"""


class SqliteNotificationStore:
    """Persist notifications to SQLite and read them back polymorphically.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_NOTIFICATION)
            conn.execute(_CREATE_EMAIL_NOTIFICATION)
            conn.execute(_CREATE_SMS_NOTIFICATION)
            conn.commit()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def persist(self, notification: NotificationBase) -> NotificationBase:
        """Insert the base row and the variant row in one transaction.

        Raises
        ------
        StoreIntegrityError
            If the id is already stored, or a variant constraint fails.
        """
        try:
            with self._connect() as conn:
                self._insert(conn, notification)
        except sqlite3.IntegrityError as exc:
            raise StoreIntegrityError(
                f"Cannot store notification {notification.notification_id}: {exc}"
            ) from exc
        logger.debug(
            "Stored %s notification %s",
            notification.kind.value,
            notification.notification_id,
        )
        return notification

    def persist_all(
        self, notifications: Iterable[NotificationBase]
    ) -> list[NotificationBase]:
        """Insert several notifications in a single transaction."""
        stored = list(notifications)
        try:
            with self._connect() as conn:
                for notification in stored:
                    self._insert(conn, notification)
        except sqlite3.IntegrityError as exc:
            raise StoreIntegrityError(f"Cannot store notifications: {exc}") from exc
        logger.info("Stored %d notification(s) in %s", len(stored), self._db_path)
        return stored

    @staticmethod
    def _insert(conn: sqlite3.Connection, notification: NotificationBase) -> None:
        conn.execute(
            """
            INSERT INTO notification
                (notification_id, first_name, last_name, created_on)
            VALUES (?, ?, ?, ?)
            """,
            (
                notification.notification_id,
                notification.first_name,
                notification.last_name,
                notification.created_on.isoformat(),
            ),
        )
        if isinstance(notification, EmailNotification):
            conn.execute(
                "INSERT INTO email_notification (notification_id, email_address) VALUES (?, ?)",
                (notification.notification_id, notification.email_address),
            )
        elif isinstance(notification, SmsNotification):
            conn.execute(
                "INSERT INTO sms_notification (notification_id, phone_number) VALUES (?, ?)",
                (notification.notification_id, notification.phone_number),
            )
        else:
            raise StoreIntegrityError(
                f"No table for notification kind {notification.kind.value!r}"
            )

    # ------------------------------------------------------------------
    # Polymorphic reads
    # ------------------------------------------------------------------

    def find_all(self) -> list[NotificationBase]:
        """Return every notification, of every variant, in insertion order."""
        with self._connect() as conn:
            rows = conn.execute(_SELECT_POLYMORPHIC + " ORDER BY n.rowid ASC").fetchall()
        return [self._row_to_notification(row) for row in rows]

    def find_by_id(self, notification_id: str) -> NotificationBase | None:
        with self._connect() as conn:
            row = conn.execute(
                _SELECT_POLYMORPHIC + " WHERE n.notification_id = ?",
                (notification_id,),
            ).fetchone()
        return self._row_to_notification(row) if row else None

    def count(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) FROM notification").fetchone()
        return row[0]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_notification(row: tuple) -> NotificationBase:
        """Convert a polymorphic query row to the matching variant model."""
        (
            notification_id,
            first_name,
            last_name,
            created_on,
            email_address,
            phone_number,
            kind,
            variant_rows,
        ) = row
        if kind is None:
            raise StoreIntegrityError(
                f"Notification {notification_id} has no variant row."
            )
        if variant_rows > 1:
            raise StoreIntegrityError(
                f"Notification {notification_id} has {variant_rows} variant rows."
            )
        data = {
            "notification_id": notification_id,
            "first_name": first_name,
            "last_name": last_name,
            "created_on": created_on,
            "kind": kind,
        }
        if kind == NotificationKind.EMAIL.value:
            data["email_address"] = email_address
        elif kind == NotificationKind.SMS.value:
            data["phone_number"] = phone_number
        return parse_notification(data)
