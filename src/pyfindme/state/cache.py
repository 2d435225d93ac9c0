"""Single-slot location cache shared by the tracker and its readers."""

from __future__ import annotations

import threading

from pyfindme.models.snapshot import LocationSnapshot


class LocationCache:
    """Hold the most recent :class:`LocationSnapshot`.

    One writer (the tracker) replaces the snapshot wholesale; any number of
    readers, possibly on other threads, read it. Snapshots are frozen, so a
    reader holding a reference can never see it change.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: LocationSnapshot | None = None

    def replace(self, snapshot: LocationSnapshot) -> None:
        """Swap in *snapshot*; the last writer wins."""
        with self._lock:
            self._snapshot = snapshot

    def read(self) -> LocationSnapshot | None:
        """Return the current snapshot, or ``None`` if never populated."""
        with self._lock:
            return self._snapshot
