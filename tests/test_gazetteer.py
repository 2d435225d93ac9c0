from __future__ import annotations

from pathlib import Path

import pytest

from pyfindme.exceptions import FindMeConfigError
from pyfindme.gazetteer import Gazetteer


def test_load_keeps_only_qualifying_rows(make_row) -> None:
    qualifying = [
        make_row("Burlington", 44.4759, -73.2121),
        make_row("Montreal", 45.5017, -73.5673, country="CA", admin1="10", population=1_600_000),
        make_row("Lyon", 45.7640, 4.8357, country="FR", admin1="84", population=500_000, feature_code="PPLA"),
    ]
    disqualifying = [
        make_row("Tiny Town", 44.0, -72.0, population=40_000),
        make_row("Old Quarter", 45.5, -73.55, country="CA", admin1="10", feature_code="PPLX"),
        make_row("Mount Mansfield", 44.54, -72.81, feature_class="T", feature_code="MT"),
        make_row("Nowhere", 10.0, 10.0, country="ZZ", admin1="01"),
    ]
    rows = [disqualifying[0], qualifying[0], disqualifying[1], qualifying[1], disqualifying[2], disqualifying[3], qualifying[2]]

    gazetteer = Gazetteer.load(rows)

    assert len(gazetteer) == len(qualifying)
    assert [p.name for p in gazetteer] == ["Burlington", "Montreal", "Lyon"]


def test_load_carries_region_code_and_coordinates(make_row) -> None:
    gazetteer = Gazetteer.load([make_row("Burlington", 44.4759, -73.2121, admin1="VT")])

    place = gazetteer[0]
    assert place.region_code == "VT"
    assert place.country_code == "US"
    assert place.latitude == pytest.approx(44.4759)
    assert place.longitude == pytest.approx(-73.2121)


def test_population_threshold_is_strict(make_row) -> None:
    gazetteer = Gazetteer.load(
        [
            make_row("Exactly", 1.0, 1.0, population=40_000),
            make_row("Above", 2.0, 2.0, population=40_001),
        ]
    )
    assert [p.name for p in gazetteer] == ["Above"]


def test_malformed_rows_are_skipped(make_row) -> None:
    bad_population = make_row("Broken", 1.0, 1.0)
    bad_population[14] = "many"
    bad_latitude = make_row("Adrift", 1.0, 1.0)
    bad_latitude[4] = "north"

    gazetteer = Gazetteer.load([["too", "short"], bad_population, bad_latitude, make_row("Fine", 3.0, 3.0)])

    assert [p.name for p in gazetteer] == ["Fine"]


def test_empty_result_raises_config_error(make_row) -> None:
    with pytest.raises(FindMeConfigError):
        Gazetteer.load([make_row("Tiny", 1.0, 1.0, population=10)])

    with pytest.raises(FindMeConfigError):
        Gazetteer.load([])


def test_gazetteer_is_immutable_sequence(two_city_gazetteer: Gazetteer) -> None:
    assert isinstance(two_city_gazetteer.places, tuple)
    with pytest.raises(TypeError):
        two_city_gazetteer[0] = two_city_gazetteer[1]  # type: ignore[index]


def test_from_file_reads_tab_delimited_dump(tmp_path: Path, make_row) -> None:
    rows = [
        make_row("Burlington", 44.4759, -73.2121),
        make_row('Quote "Town"', 44.0, -73.0),
        make_row("Hamlet", 44.1, -73.1, population=900),
    ]
    dump = tmp_path / "allCountries.txt"
    dump.write_text("".join("\t".join(row) + "\n" for row in rows), encoding="utf-8")

    gazetteer = Gazetteer.from_file(dump)

    assert [p.name for p in gazetteer] == ["Burlington", 'Quote "Town"']


def test_from_file_missing_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(FindMeConfigError, match="Cannot read gazetteer"):
        Gazetteer.from_file(tmp_path / "missing.txt")


def test_from_file_undecodable_dump_raises_config_error(tmp_path: Path, make_row) -> None:
    dump = tmp_path / "allCountries.txt"
    dump.write_bytes(("\t".join(make_row("Burlington", 44.4759, -73.2121)) + "\n").encode() + b"\xff\xfe\tbad\n")

    with pytest.raises(FindMeConfigError, match="Cannot read gazetteer"):
        Gazetteer.from_file(dump)
