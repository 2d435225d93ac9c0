"""Find My device models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=UTC)


class DeviceLocation(BaseModel):
    """Last reported position of a device.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    timestamp : int
        Time of the fix in epoch milliseconds.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    latitude: float
    longitude: float
    timestamp: int = Field(validation_alias=AliasChoices("timeStamp", "timestamp"))

    @field_validator("timestamp")
    @classmethod
    def _timestamp_in_range(cls, value: int) -> int:
        try:
            _from_epoch_ms(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"timestamp {value} is outside the representable range") from exc
        return value

    @property
    def observed_at(self) -> datetime:
        """The fix time as an aware UTC datetime."""
        return _from_epoch_ms(self.timestamp)


class Device(BaseModel):
    """A device listed by the Find My refresh endpoint."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    name: str
    id: str
    location: DeviceLocation | None = None
    raw: dict[str, Any] = Field(default_factory=dict)
    """Full API entry for access to additional fields."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged
