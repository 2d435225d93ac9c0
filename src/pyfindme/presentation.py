"""Status sentence rendering."""

from __future__ import annotations

from datetime import datetime

from pyfindme._constants import DEFAULT_PLACE
from pyfindme.models.snapshot import LocationSnapshot

#: Largest bucket-local count still shown; anything above is too stale.
MAX_SHOWN_COUNT = 99


def default_sentence(default_place: str = DEFAULT_PLACE) -> str:
    return f"I'm based in {default_place}"


def elapsed_bucket(elapsed_seconds: float) -> tuple[int, str]:
    """Bucket an elapsed duration into ``(count, unit)``.

    Minutes below one hour, hours below one day, days otherwise. ``unit``
    is singular when ``count == 1``.
    """
    minutes = int(elapsed_seconds // 60)
    hours = int(elapsed_seconds // 3600)
    if minutes < 60:
        count, unit = minutes, "minutes"
    elif hours < 24:
        count, unit = hours, "hours"
    else:
        count, unit = int(elapsed_seconds // 86400), "days"

    if count == 1:
        unit = unit[:-1]
    return count, unit


def format_status(
    snapshot: LocationSnapshot | None,
    now: datetime,
    *,
    default_place: str = DEFAULT_PLACE,
) -> str:
    """Render where the device was last seen, relative to *now*.

    Falls back to the default sentence when there is no snapshot or when
    the bucket-local count exceeds :data:`MAX_SHOWN_COUNT`. Minutes and
    hours roll over before reaching it, so only fixes 100 days or older
    are suppressed.
    """
    if snapshot is None:
        return default_sentence(default_place)

    count, unit = elapsed_bucket(snapshot.age_at(now))

    if count > MAX_SHOWN_COUNT:
        return default_sentence(default_place)
    if count == 0:
        return f"as of now, I'm in {snapshot.label}"
    return f"as of {count} {unit} ago, I'm in {snapshot.label}"
