"""Tests for pydantic model parsing."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from pyfindme.models.device import Device, DeviceLocation
from pyfindme.models.snapshot import LocationSnapshot
from pyfindme.session import Session


class TestDevice:
    def test_parses_refresh_entry(self) -> None:
        entry = {
            "name": "My iPhone",
            "id": "abc==",
            "batteryLevel": 0.8,
            "location": {
                "latitude": 44.4759,
                "longitude": -73.2121,
                "timeStamp": 1771000000123,
                "horizontalAccuracy": 35.0,
                "isOld": False,
            },
        }

        device = Device.model_validate(entry)

        assert device.name == "My iPhone"
        assert device.location is not None
        assert device.location.timestamp == 1771000000123
        assert device.location.observed_at == datetime(2026, 2, 13, 16, 26, 40, 123000, tzinfo=UTC)
        assert device.raw["batteryLevel"] == 0.8

    def test_missing_location(self) -> None:
        assert Device.model_validate({"name": "Watch", "id": "w"}).location is None
        assert Device.model_validate({"name": "Watch", "id": "w", "location": None}).location is None

    def test_missing_name_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Device.model_validate({"id": "x"})

    def test_location_accepts_field_name(self) -> None:
        location = DeviceLocation(latitude=1.0, longitude=2.0, timestamp=0)
        assert location.observed_at == datetime(1970, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize("timestamp", [10**20, -(10**20)])
    def test_out_of_range_timestamp_is_rejected(self, timestamp: int) -> None:
        with pytest.raises(ValidationError, match="representable range"):
            DeviceLocation.model_validate({"latitude": 1.0, "longitude": 2.0, "timeStamp": timestamp})


class TestSnapshot:
    def test_is_frozen(self) -> None:
        snapshot = LocationSnapshot(label="Lyon, France", observed_at=datetime(2026, 1, 1, tzinfo=UTC))
        with pytest.raises(ValidationError):
            snapshot.label = "Elsewhere"  # type: ignore[misc]

    def test_requires_aware_timestamp(self) -> None:
        with pytest.raises(ValidationError):
            LocationSnapshot(label="Lyon, France", observed_at=datetime(2026, 1, 1))

    def test_age_never_negative(self) -> None:
        at = datetime(2026, 1, 1, tzinfo=UTC)
        snapshot = LocationSnapshot(label="Lyon, France", observed_at=at)
        assert snapshot.age_at(at + timedelta(seconds=90)) == 90.0
        assert snapshot.age_at(at - timedelta(seconds=90)) == 0.0


class TestSession:
    def test_progressive_population(self) -> None:
        session = Session()
        assert not session.is_identified
        assert not session.has_endpoint

        identified = Session(account_country_code="USA", session_token="tok")
        assert identified.is_identified
        ready = identified.model_copy(update={"findme_url": "https://p42-fmipweb.icloud.com:443"})
        assert ready.has_endpoint
        assert ready.session_token == "tok"
