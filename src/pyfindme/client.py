"""High-level async client for the iCloud Find My web service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, NoReturn, Protocol

import aiohttp

from pyfindme._api.account import establish
from pyfindme._api.findme import parse_devices, refresh_client
from pyfindme._api.identity import sign_in
from pyfindme._constants import CHALLENGE_STATUSES, STATUS_SESSION_EXPIRED
from pyfindme._transport import HttpTransport, Transport, TransportResponse
from pyfindme.config import FindMeConfig
from pyfindme.exceptions import FindMeChallengeExhaustedError, FindMeError
from pyfindme.models.device import Device
from pyfindme.session import Session, SessionState

_logger = logging.getLogger(__name__)


class DeviceSource(Protocol):
    """Anything that can list the account's devices.

    The tracker depends on this rather than on :class:`FindMeClient` so
    tests can hand it a fake.
    """

    async def fetch_devices(self) -> list[Device]:
        ...


class FindMeClient:
    """Async client owning the authentication lifecycle.

    Usage::

        async with FindMeClient(config) as client:
            await client.login()
            devices = await client.fetch_devices()

    Authentication runs in two phases: *identify* (sign-in, yields a
    session token) and *establish* (account setup, yields the Find My
    endpoint). A refresh answered with HTTP 450 re-runs both phases, HTTP
    421 re-runs only the second; the refresh is then retried once.
    """

    def __init__(
        self,
        config: FindMeConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._session = Session()
        self._state = SessionState.UNAUTHENTICATED
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FindMeClient:
        if self._transport is None:
            if self._http_session is None:
                # Cookies are managed by HttpTransport.
                self._http_session = aiohttp.ClientSession(cookie_jar=aiohttp.DummyCookieJar())
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Session:
        return self._session

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self) -> None:
        """Run both authentication phases.

        Raises
        ------
        FindMeAuthenticationError
            If sign-in is rejected or returns no token.
        FindMeTransportError
            On network failures.
        """
        async with self._lock:
            await self._login()

    async def _login(self) -> None:
        self._state = SessionState.UNAUTHENTICATED
        await self._identify()
        await self._establish()

    async def _identify(self) -> None:
        transport = self._require_transport()
        self._session = await sign_in(self._config, transport)
        self._state = SessionState.PARTIALLY_AUTHENTICATED
        _logger.debug("Identify phase complete (account country %s)", self._session.account_country_code)

    async def _establish(self) -> None:
        transport = self._require_transport()
        self._session = await establish(self._session, transport)
        self._state = SessionState.READY
        _logger.info("Session ready (findme endpoint %s)", "set" if self._session.has_endpoint else "missing")

    async def _ensure_ready(self) -> None:
        """Finish whatever phases a previous failure left undone."""
        if self._state == SessionState.READY:
            return
        if self._state == SessionState.PARTIALLY_AUTHENTICATED and self._session.is_identified:
            await self._establish()
            return
        await self._login()

    async def _reauthenticate(self, status: int) -> None:
        self._state = SessionState.REAUTHENTICATING
        if status == STATUS_SESSION_EXPIRED:
            _logger.info("Session expired (HTTP %d); signing in again", status)
            try:
                await self._identify()
            except FindMeError:
                self._state = SessionState.UNAUTHENTICATED
                raise
        else:
            _logger.info("Session stale (HTTP %d); refreshing account setup", status)
        try:
            await self._establish()
        except FindMeError:
            self._state = SessionState.PARTIALLY_AUTHENTICATED
            raise

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise FindMeError("Client not initialized. Use 'async with FindMeClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    async def fetch_devices(self) -> list[Device]:
        """Fetch every device on the account with its last known location.

        A challenged refresh triggers one re-authentication and one retry.

        Raises
        ------
        FindMeChallengeExhaustedError
            If the retried refresh is challenged again.
        FindMeTransportError
            On network failures or unexpected statuses.
        FindMeParseError
            If the response body is malformed.
        """
        async with self._lock:
            await self._ensure_ready()
            transport = self._require_transport()

            response = await refresh_client(self._session, transport)
            if response.status in CHALLENGE_STATUSES:
                await self._reauthenticate(response.status)
                response = await refresh_client(self._session, transport)
                if response.status in CHALLENGE_STATUSES:
                    self._raise_exhausted(response)

            return parse_devices(response)

    def _raise_exhausted(self, response: TransportResponse) -> NoReturn:
        self._state = (
            SessionState.UNAUTHENTICATED
            if response.status == STATUS_SESSION_EXPIRED
            else SessionState.PARTIALLY_AUTHENTICATED
        )
        raise FindMeChallengeExhaustedError(
            f"Session still rejected after re-authentication (HTTP {response.status})",
            status_code=response.status,
            endpoint=response.url,
        )
