"""Subcommand implementations for the polynotify CLI."""
