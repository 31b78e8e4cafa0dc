"""``polynotify seed``: store the sample SMS and email notifications."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from polynotify.config import config
from polynotify.core.notification_store import StoreIntegrityError
from polynotify.core.sqlite_store import SqliteNotificationStore
from polynotify.models.notifications import (
    EmailNotification,
    NotificationBase,
    SmsNotification,
)

console = Console()


def sample_notifications() -> list[NotificationBase]:
    """One SMS and one email notification for the same recipient."""
    return [
        SmsNotification(
            phone_number="012-345-67890",
            first_name="Vlad",
            last_name="Mihalcea",
        ),
        EmailNotification(
            email_address="vlad@acme.com",
            first_name="Vlad",
            last_name="Mihalcea",
        ),
    ]


def seed_cmd(
    store_path: Path = typer.Option(
        None, "--store", help="Path to the notification database."
    ),
) -> None:
    """Persist the sample notifications."""
    store = SqliteNotificationStore(store_path or config.store_path)
    try:
        stored = store.persist_all(sample_notifications())
    except StoreIntegrityError as exc:
        console.print(f"[bold red]Seeding failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    for notification in stored:
        console.print(
            f"[green]Stored[/green] {notification.kind.value} "
            f"notification {notification.notification_id}"
        )
