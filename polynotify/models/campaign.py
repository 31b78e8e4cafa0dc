"""Campaign models: what was requested and what was dispatched."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class Campaign(BaseModel):
    """A named campaign, created when ``send_campaign`` is called."""

    model_config = ConfigDict(frozen=True)

    campaign_id: str = Field(default_factory=lambda: f"cmp-{uuid.uuid4().hex[:12]}")
    name: str
    message: str = ""
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class CampaignReport(BaseModel):
    """Summary of a completed campaign."""

    model_config = ConfigDict(frozen=True)

    campaign_id: str
    name: str
    dispatched: int = 0
    by_kind: dict[str, int] = {}
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
