"""Nearest-place resolution over a :class:`~pyfindme.gazetteer.Gazetteer`."""

from __future__ import annotations

import logging
import math

from pyfindme._constants import US_COUNTRY_CODE
from pyfindme._regions import US_STATES, country_name
from pyfindme.exceptions import FindMeNotFoundError
from pyfindme.gazetteer import Gazetteer
from pyfindme.models.place import Place

_logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two lat/lon points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def region_name(place: Place) -> str:
    """State name for US places, country name for everything else.

    Raises
    ------
    FindMeNotFoundError
        If the abbreviation or country code has no table entry.
    """
    if place.country_code == US_COUNTRY_CODE:
        state = US_STATES.get(place.region_code)
        if state is None:
            raise FindMeNotFoundError(f"Unknown US state abbreviation {place.region_code!r} for {place.name}")
        return state

    name = country_name(place.country_code)
    if name is None:
        raise FindMeNotFoundError(f"Unknown country code {place.country_code!r} for {place.name}")
    return name


def label_for(place: Place) -> str:
    return f"{place.name}, {region_name(place)}"


class Resolver:
    """Find the gazetteer place closest to a coordinate.

    The scan is linear and stable: when two places are equally close, the
    one loaded first wins.
    """

    def __init__(self, gazetteer: Gazetteer) -> None:
        self._gazetteer = gazetteer

    @property
    def gazetteer(self) -> Gazetteer:
        return self._gazetteer

    def nearest_place(self, latitude: float, longitude: float) -> Place:
        """Return the closest place to (*latitude*, *longitude*).

        Raises
        ------
        FindMeNotFoundError
            If the gazetteer is empty.
        """
        closest: Place | None = None
        closest_distance = math.inf
        for place in self._gazetteer:
            distance = haversine_m(latitude, longitude, place.latitude, place.longitude)
            if closest is None or distance < closest_distance:
                closest = place
                closest_distance = distance

        if closest is None:
            raise FindMeNotFoundError("Gazetteer is empty")

        _logger.debug("Nearest place to (%.4f, %.4f): %s at %.0f m", latitude, longitude, closest.name, closest_distance)
        return closest

    def find_nearest(self, latitude: float, longitude: float) -> str:
        """Label (``"<place>, <state or country>"``) of the closest place."""
        return label_for(self.nearest_place(latitude, longitude))
