"""Main Typer application: imports and registers all CLI commands.

Entry point: ``polynotify`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from polynotify.cli.commands.demo import demo_cmd
from polynotify.cli.commands.list_cmd import list_cmd
from polynotify.cli.commands.seed import seed_cmd
from polynotify.cli.commands.send_campaign import send_campaign_cmd
from polynotify.config import config

app = typer.Typer(
    name="polynotify",
    help="polynotify: route stored notifications to the sender for their kind.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="seed", help="Store the sample SMS and email notifications.")(seed_cmd)
app.command(name="list", help="List stored notifications.")(list_cmd)
app.command(name="send-campaign", help="Send a campaign to every stored notification.")(
    send_campaign_cmd
)
app.command(name="demo", help="Run a sample campaign against an in-memory store.")(demo_cmd)


def configure_logging(level: str) -> None:
    """Attach a Rich handler to the root logger at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (defaults to POLYNOTIFY_LOG_LEVEL)."
    ),
) -> None:
    """polynotify command-line interface."""
    configure_logging(log_level or config.log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
