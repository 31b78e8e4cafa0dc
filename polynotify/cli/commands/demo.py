"""``polynotify demo``: run a campaign against in-memory sample data.

Stores one SMS and one email notification, sends a campaign, and shows
the payloads each sender produced.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from polynotify.cli.commands.seed import sample_notifications
from polynotify.cli.commands.send_campaign import print_report
from polynotify.core.notification_service import NotificationService
from polynotify.core.notification_store import InMemoryNotificationStore
from polynotify.senders.email import EmailNotificationSender
from polynotify.senders.sms import SmsNotificationSender

console = Console()


def demo_cmd(
    name: str = typer.Option("Black Friday", "--name", help="Campaign name."),
    message: str = typer.Option(
        "High-Performance Java Persistence is 40% OFF",
        "--message",
        help="Campaign message.",
    ),
) -> None:
    """Run the sample campaign end to end without touching disk."""
    store = InMemoryNotificationStore()
    store.persist_all(sample_notifications())

    email_sender = EmailNotificationSender()
    sms_sender = SmsNotificationSender()
    service = NotificationService(store, [email_sender, sms_sender])

    console.print()
    console.print(
        Panel(
            f"[bold]polynotify demo[/bold]\n\n"
            f"{store.count()} notification(s) stored.\n"
            f"Routing table: {service.dispatch_table!r}",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    report = service.send_campaign(name, message)

    for payload in email_sender.flush():
        console.print(f"[cyan]email[/cyan] -> {payload.recipient_name} <{payload.recipient}>")
    for payload in sms_sender.flush():
        console.print(f"[cyan]sms[/cyan]   -> {payload.recipient_name} ({payload.phone_number})")

    print_report(report)
