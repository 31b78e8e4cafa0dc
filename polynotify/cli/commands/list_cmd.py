"""``polynotify list``: show every stored notification."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from polynotify.config import config
from polynotify.core.notification_store import StoreIntegrityError
from polynotify.core.sqlite_store import SqliteNotificationStore
from polynotify.models.notifications import EmailNotification, SmsNotification

console = Console()


def list_cmd(
    store_path: Path = typer.Option(
        None, "--store", help="Path to the notification database."
    ),
) -> None:
    """List stored notifications of every kind."""
    store = SqliteNotificationStore(store_path or config.store_path)
    try:
        notifications = store.find_all()
    except (StoreIntegrityError, ValidationError) as exc:
        console.print(f"[bold red]Store error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if not notifications:
        console.print("[dim]No notifications stored.[/dim]")
        return

    table = Table(title="Notifications")
    table.add_column("ID", style="cyan")
    table.add_column("Kind")
    table.add_column("Recipient")
    table.add_column("Address")
    table.add_column("Created", style="dim")

    for n in notifications:
        if isinstance(n, EmailNotification):
            address = n.email_address
        elif isinstance(n, SmsNotification):
            address = n.phone_number
        else:
            address = ""
        table.add_row(
            n.notification_id,
            n.kind.value,
            n.recipient_name,
            address,
            n.created_on.isoformat(timespec="seconds"),
        )

    console.print(table)
