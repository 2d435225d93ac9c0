"""Custom exception hierarchy for pyfindme."""

from __future__ import annotations


class FindMeError(Exception):
    """Base exception for all pyfindme errors."""


class FindMeConfigError(FindMeError):
    """Invalid or missing configuration (including an unusable gazetteer)."""


class FindMeTransportError(FindMeError):
    """HTTP-level failure (network, timeout, unexpected status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class FindMeParseError(FindMeError):
    """Response body or headers could not be parsed."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FindMeNotFoundError(FindMeError):
    """Target device, device location, place or region could not be found."""


class FindMeAuthenticationError(FindMeError):
    """Authentication against the service failed."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FindMeInvalidCredentialsError(FindMeAuthenticationError):
    """Sign-in rejected the account name or password.

    ``code`` carries the value of the ``X-Apple-I-Rscd`` header that the
    identity endpoint answered with.
    """

    def __init__(self, message: str, *, code: str = "", endpoint: str = "") -> None:
        self.code = code
        super().__init__(message, endpoint=endpoint)


class FindMeMissingTokenError(FindMeAuthenticationError):
    """Sign-in succeeded but the session token or account country was absent."""


class FindMeChallengeExhaustedError(FindMeAuthenticationError):
    """The service kept rejecting the session after one re-authentication.

    Raised by :meth:`pyfindme.client.FindMeClient.fetch_devices` when the
    retried request is challenged again (HTTP 450 or 421).
    """

    def __init__(self, message: str, *, status_code: int | None = None, endpoint: str = "") -> None:
        self.status_code = status_code
        super().__init__(message, endpoint=endpoint)
