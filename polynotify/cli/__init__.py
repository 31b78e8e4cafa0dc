"""polynotify CLI: Typer-based command-line interface.

Provides the ``polynotify`` command with subcommands for seeding sample
notifications, listing the store, sending campaigns, and running a demo.

All output uses Rich for formatted terminal display.
"""
