"""Session state accumulated by the two authentication phases."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict


class SessionState(enum.Enum):
    """Lifecycle of :class:`pyfindme.client.FindMeClient`."""

    UNAUTHENTICATED = "unauthenticated"
    PARTIALLY_AUTHENTICATED = "partially_authenticated"
    READY = "ready"
    REAUTHENTICATING = "reauthenticating"


class Session(BaseModel):
    """Session values obtained while signing in.

    Fields fill in progressively: the identify phase yields
    ``account_country_code`` and ``session_token``, the establish phase yields
    ``findme_url``. The model is frozen; the client swaps in an updated copy
    after each phase.

    Parameters
    ----------
    account_country_code : str or None
        Account country reported by the identity service.
    session_token : str or None
        Token exchanged for web service URLs during account setup.
    findme_url : str or None
        Base URL of the Find My web service for this account.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    account_country_code: str | None = None
    session_token: str | None = None
    findme_url: str | None = None

    @property
    def is_identified(self) -> bool:
        """Whether the identify phase has completed."""
        return self.account_country_code is not None and self.session_token is not None

    @property
    def has_endpoint(self) -> bool:
        return bool(self.findme_url)
