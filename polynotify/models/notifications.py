"""Notification records: one base shape, one model per delivery channel.

Every record is exactly one variant.  The variant is identified by the
``kind`` tag, which doubles as the pydantic discriminator, so a plain
mapping read back from storage always validates into the right model.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class NotificationKind(str, Enum):
    """The closed set of notification variants."""

    EMAIL = "email"
    SMS = "sms"


class NotificationBase(BaseModel):
    """Fields shared by all notification variants.

    ``notification_id`` and ``created_on`` are assigned when the record is
    created.  The model is frozen, so neither changes afterwards.
    The base is never instantiated directly; every record is one variant.
    """

    model_config = ConfigDict(frozen=True)

    notification_id: str = Field(
        default_factory=lambda: f"ntf-{uuid.uuid4().hex[:12]}"
    )
    first_name: str = ""
    last_name: str = ""
    created_on: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    kind: NotificationKind

    @model_validator(mode="after")
    def _require_variant(self) -> NotificationBase:
        if type(self) is NotificationBase:
            raise ValueError(
                "NotificationBase is abstract; create an EmailNotification "
                "or SmsNotification instead"
            )
        return self

    @property
    def recipient_name(self) -> str:
        """Return ``"<first> <last>"`` with empty parts dropped."""
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class EmailNotification(NotificationBase):
    """A notification delivered by email."""

    kind: Literal[NotificationKind.EMAIL] = NotificationKind.EMAIL
    email_address: str = Field(min_length=1)


class SmsNotification(NotificationBase):
    """A notification delivered by SMS."""

    kind: Literal[NotificationKind.SMS] = NotificationKind.SMS
    phone_number: str = Field(min_length=1)


Notification = Annotated[
    Union[EmailNotification, SmsNotification],
    Field(discriminator="kind"),
]

NOTIFICATION_MODELS: dict[NotificationKind, type[NotificationBase]] = {
    NotificationKind.EMAIL: EmailNotification,
    NotificationKind.SMS: SmsNotification,
}

_notification_adapter: TypeAdapter[Any] = TypeAdapter(Notification)


def parse_notification(data: dict[str, Any]) -> NotificationBase:
    """Validate *data* into the variant named by its ``kind`` key.

    Raises
    ------
    pydantic.ValidationError
        If ``kind`` is missing or unknown, or a variant field is absent.

    Examples
    --------
    >>> n = parse_notification({"kind": "sms", "phone_number": "012-345-67890"})
    >>> type(n).__name__
    'SmsNotification'
    """
    return _notification_adapter.validate_python(data)
