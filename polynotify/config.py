"""Runtime configuration, driven by environment variables.

Reads from a .env file and POLYNOTIFY_* environment variables via
pydantic-settings.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class NotifyConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export POLYNOTIFY_ENVIRONMENT=staging
        export POLYNOTIFY_LOG_LEVEL=DEBUG
        export POLYNOTIFY_STORE_PATH=/data/notifications.db

    Or via .env file::

        POLYNOTIFY_EMAIL_SENDER_ADDRESS=campaigns@acme.com
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="POLYNOTIFY_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage
    store_path: Path = Path(".polynotify/notifications.db")

    # Sender identities
    email_sender_address: str = "notifications@localhost"
    sms_sender_id: str = "POLYNOTIFY"

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton: `from polynotify.config import config`
config = NotifyConfig()
