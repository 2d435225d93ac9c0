"""Cached location snapshot."""

from __future__ import annotations

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict


class LocationSnapshot(BaseModel):
    """The most recent resolved location of the tracked device."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str
    observed_at: AwareDatetime

    def age_at(self, now: datetime) -> float:
        """Seconds between the fix and *now*, never negative."""
        return max(0.0, (now - self.observed_at).total_seconds())
