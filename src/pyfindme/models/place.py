"""Gazetteer place model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Place(BaseModel):
    """A named populated place.

    ``region_code`` is the GeoNames first-level administrative code (the
    state abbreviation for US places); it is expanded to a full name only
    when a label is built.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    region_code: str
    country_code: str
    latitude: float
    longitude: float
