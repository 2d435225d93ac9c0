"""Data models for pyfindme."""

from pyfindme.models.device import Device, DeviceLocation
from pyfindme.models.place import Place
from pyfindme.models.snapshot import LocationSnapshot

__all__ = [
    "Device",
    "DeviceLocation",
    "LocationSnapshot",
    "Place",
]
