from __future__ import annotations

from collections.abc import Callable

import pytest

from pyfindme.config import FindMeConfig
from pyfindme.gazetteer import Gazetteer

RowFactory = Callable[..., list[str]]


def _geonames_row(
    name: str,
    latitude: float,
    longitude: float,
    *,
    country: str = "US",
    admin1: str = "VT",
    population: int = 50_000,
    feature_class: str = "P",
    feature_code: str = "PPLA2",
) -> list[str]:
    row = [""] * 19
    row[0] = str(abs(hash(name)) % 10_000_000)
    row[1] = name
    row[2] = name
    row[4] = str(latitude)
    row[5] = str(longitude)
    row[6] = feature_class
    row[7] = feature_code
    row[8] = country
    row[10] = admin1
    row[14] = str(population)
    row[17] = "America/New_York"
    row[18] = "2024-01-01"
    return row


@pytest.fixture
def make_row() -> RowFactory:
    return _geonames_row


@pytest.fixture
def config() -> FindMeConfig:
    return FindMeConfig(
        username="user@example.com",
        password="secret",
        device_name="My iPhone",
        request_timeout=5.0,
    )


@pytest.fixture
def two_city_gazetteer(make_row: RowFactory) -> Gazetteer:
    return Gazetteer.load(
        [
            make_row("Burlington", 44.4759, -73.2121, country="US", admin1="VT"),
            make_row("Montreal", 45.5017, -73.5673, country="CA", admin1="10", population=1_600_000),
        ]
    )
