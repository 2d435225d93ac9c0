"""Load-once gazetteer of populated places.

Rows follow the GeoNames ``allCountries.txt`` column layout. Only places
that can be labelled meaningfully are kept: populated places (feature class
``P``, excluding ``PPLX`` sections of a place) with a population above
:data:`~pyfindme._constants.POPULATION_THRESHOLD` in a known ISO country.
"""

from __future__ import annotations

import csv
import logging
import sys
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import overload

from pyfindme._constants import POPULATED_PLACE_CLASS, POPULATION_THRESHOLD, SECTION_OF_PLACE_CODE
from pyfindme._regions import is_known_country
from pyfindme.exceptions import FindMeConfigError
from pyfindme.models.place import Place

_logger = logging.getLogger(__name__)

# GeoNames column positions.
COL_NAME = 1
COL_LATITUDE = 4
COL_LONGITUDE = 5
COL_FEATURE_CLASS = 6
COL_FEATURE_CODE = 7
COL_COUNTRY_CODE = 8
COL_ADMIN1_CODE = 10
COL_POPULATION = 14

_MIN_COLUMNS = COL_POPULATION + 1


def _qualifies(row: Sequence[str]) -> bool:
    if row[COL_FEATURE_CLASS] != POPULATED_PLACE_CLASS or row[COL_FEATURE_CODE] == SECTION_OF_PLACE_CODE:
        return False
    if int(row[COL_POPULATION]) <= POPULATION_THRESHOLD:
        return False
    return is_known_country(row[COL_COUNTRY_CODE])


def _to_place(row: Sequence[str]) -> Place:
    return Place(
        name=row[COL_NAME],
        region_code=row[COL_ADMIN1_CODE],
        country_code=row[COL_COUNTRY_CODE].upper(),
        latitude=float(row[COL_LATITUDE]),
        longitude=float(row[COL_LONGITUDE]),
    )


class Gazetteer(Sequence[Place]):
    """Immutable, ordered collection of places.

    Build it with :meth:`load` or :meth:`from_file`; the place order is the
    row order of the source, which the resolver relies on for tie-breaking.
    """

    __slots__ = ("_places",)

    def __init__(self, places: Iterable[Place]) -> None:
        self._places: tuple[Place, ...] = tuple(places)

    @classmethod
    def load(cls, rows: Iterable[Sequence[str]]) -> Gazetteer:
        """Filter *rows* into a gazetteer.

        Rows that are too short or carry unparseable numbers are skipped.

        Raises
        ------
        FindMeConfigError
            If no row qualifies.
        """
        places: list[Place] = []
        skipped = 0
        for row in rows:
            if len(row) < _MIN_COLUMNS:
                skipped += 1
                continue
            try:
                if _qualifies(row):
                    places.append(_to_place(row))
            except ValueError:
                skipped += 1

        if skipped:
            _logger.debug("Skipped %d malformed gazetteer rows", skipped)
        if not places:
            raise FindMeConfigError("Gazetteer is empty: no row qualified as a populated place")

        _logger.info("Loaded gazetteer with %d places", len(places))
        return cls(places)

    @classmethod
    def from_file(cls, path: str | Path) -> Gazetteer:
        """Load a tab-delimited GeoNames dump from *path*.

        Raises
        ------
        FindMeConfigError
            If the file cannot be opened or decoded as UTF-8 text, or no
            row qualifies.
        """
        source = Path(path)
        # Some GeoNames fields (alternate names) exceed the csv default limit.
        csv.field_size_limit(sys.maxsize)
        try:
            with source.open(encoding="utf-8", newline="") as handle:
                reader = csv.reader(handle, delimiter="\t", quoting=csv.QUOTE_NONE)
                return cls.load(reader)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise FindMeConfigError(f"Cannot read gazetteer {source}: {exc}") from exc

    @property
    def places(self) -> tuple[Place, ...]:
        return self._places

    @overload
    def __getitem__(self, index: int) -> Place: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Place]: ...

    def __getitem__(self, index: int | slice) -> Place | Sequence[Place]:
        return self._places[index]

    def __len__(self) -> int:
        return len(self._places)

    def __iter__(self) -> Iterator[Place]:
        return iter(self._places)

    def __repr__(self) -> str:
        return f"Gazetteer({len(self._places)} places)"
