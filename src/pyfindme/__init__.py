"""pyfindme - Async iCloud Find My client and coarse device location tracker."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfindme")
except PackageNotFoundError:
    __version__ = "0+local"

from pyfindme.client import DeviceSource, FindMeClient
from pyfindme.config import FindMeConfig
from pyfindme.exceptions import (
    FindMeAuthenticationError,
    FindMeChallengeExhaustedError,
    FindMeConfigError,
    FindMeError,
    FindMeInvalidCredentialsError,
    FindMeMissingTokenError,
    FindMeNotFoundError,
    FindMeParseError,
    FindMeTransportError,
)
from pyfindme.gazetteer import Gazetteer
from pyfindme.models import Device, DeviceLocation, LocationSnapshot, Place
from pyfindme.presentation import format_status
from pyfindme.resolver import Resolver
from pyfindme.session import Session, SessionState
from pyfindme.state import LocationCache
from pyfindme.tracker import LocationTracker

__all__ = [
    "__version__",
    "Device",
    "DeviceLocation",
    "DeviceSource",
    "FindMeAuthenticationError",
    "FindMeChallengeExhaustedError",
    "FindMeClient",
    "FindMeConfig",
    "FindMeConfigError",
    "FindMeError",
    "FindMeInvalidCredentialsError",
    "FindMeMissingTokenError",
    "FindMeNotFoundError",
    "FindMeParseError",
    "FindMeTransportError",
    "Gazetteer",
    "LocationCache",
    "LocationSnapshot",
    "LocationTracker",
    "Place",
    "Resolver",
    "Session",
    "SessionState",
    "format_status",
]
