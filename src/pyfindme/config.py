"""Client and tracker configuration for pyfindme."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfindme._constants import DEFAULT_PLACE
from pyfindme.exceptions import FindMeConfigError

#: One poll per day, the period the tracker was first deployed with.
DEFAULT_POLL_INTERVAL: float = 24 * 3600


@dataclasses.dataclass(frozen=True)
class FindMeConfig:
    """Configuration for the client and the location tracker.

    Parameters
    ----------
    username : str
        Apple ID account name (email).
    password : str
        Apple ID password.
    device_name : str
        Exact (case-sensitive) name of the device to track, as shown in
        Find My.
    poll_interval : float
        Seconds between two location refreshes.
    default_place : str
        Place named in the fallback sentence when no fresh location is known.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    gazetteer_path : str or None
        Path to a GeoNames tab-delimited dump used to build the gazetteer.
    host : str
        Bind address for the status server.
    port : int
        Bind port for the status server.
    """

    username: str
    password: str
    device_name: str = ""
    poll_interval: float = DEFAULT_POLL_INTERVAL
    default_place: str = DEFAULT_PLACE
    request_timeout: float = 30.0
    gazetteer_path: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise FindMeConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise FindMeConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> FindMeConfig:
        """Create configuration from environment variables.

        Reads ``FINDME_USERNAME``, ``FINDME_PASSWORD``, ``FINDME_DEVICE_NAME``
        and the optional ``FINDME_*`` variables. Explicit keyword arguments
        override environment values.

        Raises
        ------
        FindMeConfigError
            If credentials are missing or a numeric variable does not parse.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FINDME_USERNAME": "username",
            "FINDME_PASSWORD": "password",
            "FINDME_DEVICE_NAME": "device_name",
            "FINDME_DEFAULT_PLACE": "default_place",
            "FINDME_GAZETTEER_PATH": "gazetteer_path",
            "FINDME_HOST": "host",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMERIC_MAP = {
            "FINDME_POLL_INTERVAL": ("poll_interval", float),
            "FINDME_REQUEST_TIMEOUT": ("request_timeout", float),
            "FINDME_PORT": ("port", int),
        }
        for env_key, (field_name, convert) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise FindMeConfigError(f"{env_key} is not a valid number: {val!r}") from exc

        config_kwargs.update(overrides)

        for required in ("username", "password"):
            if not config_kwargs.get(required):
                raise FindMeConfigError(f"missing required setting: {required}")

        return cls(**config_kwargs)
