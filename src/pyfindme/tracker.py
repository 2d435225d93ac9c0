"""Periodic location tracking for a single device."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

import aiohttp

from pyfindme._constants import DEFAULT_PLACE
from pyfindme.client import DeviceSource
from pyfindme.exceptions import FindMeError, FindMeNotFoundError
from pyfindme.models.device import Device
from pyfindme.models.snapshot import LocationSnapshot
from pyfindme.presentation import format_status
from pyfindme.resolver import Resolver
from pyfindme.state.cache import LocationCache

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def select_device(devices: list[Device], device_name: str) -> Device:
    """Return the first device whose name equals *device_name* exactly.

    Raises
    ------
    FindMeNotFoundError
        If no device carries that name.
    """
    for device in devices:
        if device.name == device_name:
            return device
    raise FindMeNotFoundError(f"Device {device_name!r} not found among {len(devices)} devices")


class LocationTracker:
    """Poll a :class:`DeviceSource` and keep the cache current.

    Parameters
    ----------
    source : DeviceSource
        Where device lists come from (normally a logged-in
        :class:`~pyfindme.client.FindMeClient`).
    resolver : Resolver
        Turns coordinates into place labels.
    device_name : str
        Exact name of the tracked device.
    cache : LocationCache or None
        Cache to write to; a new one is created when omitted.
    default_place : str
        Place used by the fallback status sentence.
    clock : callable
        Returns the current aware datetime; injectable for tests.
    """

    def __init__(
        self,
        source: DeviceSource,
        resolver: Resolver,
        device_name: str,
        *,
        cache: LocationCache | None = None,
        default_place: str = DEFAULT_PLACE,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._resolver = resolver
        self._device_name = device_name
        self._cache = cache if cache is not None else LocationCache()
        self._default_place = default_place
        self._clock = clock

    @property
    def cache(self) -> LocationCache:
        return self._cache

    async def tick(self) -> LocationSnapshot:
        """Run one refresh cycle and store the resulting snapshot.

        Raises
        ------
        FindMeNotFoundError
            If the device is missing, has no location, or its position
            cannot be labelled.
        FindMeError
            Any client error from fetching devices.
        """
        devices = await self._source.fetch_devices()
        device = select_device(devices, self._device_name)
        if device.location is None:
            raise FindMeNotFoundError(f"Device {self._device_name!r} has no location")

        location = device.location
        snapshot = LocationSnapshot(
            label=self._resolver.find_nearest(location.latitude, location.longitude),
            observed_at=location.observed_at,
        )
        self._cache.replace(snapshot)
        _logger.info("Location updated: %s (fix at %s)", snapshot.label, snapshot.observed_at.isoformat())
        return snapshot

    async def safe_tick(self) -> bool:
        """Run :meth:`tick`, logging instead of raising. Returns success."""
        try:
            await self.tick()
        except (FindMeError, aiohttp.ClientError, asyncio.TimeoutError):
            _logger.warning("Updating location failed", exc_info=True)
            return False
        return True

    async def run(self, interval: float) -> None:
        """Refresh now and then every *interval* seconds, forever.

        Failed cycles leave the cache at its last good value.
        """
        loop = asyncio.get_running_loop()
        next_run = loop.time()
        while True:
            await self.safe_tick()
            next_run += interval
            await asyncio.sleep(max(0.0, next_run - loop.time()))

    def get_status_text(self, now: datetime | None = None) -> str:
        """Status sentence for *now*; reads the cache, never the network."""
        return format_status(
            self._cache.read(),
            now if now is not None else self._clock(),
            default_place=self._default_place,
        )
