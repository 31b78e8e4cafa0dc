"""``polynotify send-campaign``: route every stored notification to its sender."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from polynotify.config import config
from polynotify.core.notification_service import NotificationService
from polynotify.core.notification_store import StoreIntegrityError
from polynotify.core.sqlite_store import SqliteNotificationStore
from polynotify.models.campaign import CampaignReport
from polynotify.routing.router import ConfigurationError, RoutingError
from polynotify.senders import DeliveryError, default_senders

console = Console()


def print_report(report: CampaignReport) -> None:
    """Render a campaign report as a Rich panel."""
    lines = [
        f"[bold]Campaign:[/bold]    {report.name}",
        f"[bold]ID:[/bold]          {report.campaign_id}",
        f"[bold]Dispatched:[/bold]  {report.dispatched}",
    ]
    for kind, count in sorted(report.by_kind.items()):
        lines.append(f"  {kind}: {count}")
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Campaign Report[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )


def send_campaign_cmd(
    name: str = typer.Argument(..., help="Campaign name."),
    message: str = typer.Argument(..., help="Campaign message."),
    store_path: Path = typer.Option(
        None, "--store", help="Path to the notification database."
    ),
) -> None:
    """Send a campaign to every stored notification."""
    store = SqliteNotificationStore(store_path or config.store_path)
    try:
        service = NotificationService(store, default_senders(config))
        report = service.send_campaign(name, message)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)
    except (
        RoutingError, DeliveryError, StoreIntegrityError, ValidationError
    ) as exc:
        console.print(f"[bold red]Campaign aborted:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    print_report(report)
