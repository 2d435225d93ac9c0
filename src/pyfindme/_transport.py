"""JSON-over-HTTPS transport with cookie persistence."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
from collections.abc import Mapping
from http.cookies import CookieError, SimpleCookie
from typing import Any, Protocol

import aiohttp

from pyfindme._redact import redact_for_log
from pyfindme.exceptions import FindMeParseError, FindMeTransportError

_logger = logging.getLogger(__name__)

_BASE_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "*/*",
}


@dataclasses.dataclass(frozen=True)
class TransportResponse:
    """Status, headers and body of a completed request.

    Header names are stored lower-cased; use :meth:`header` for lookups.
    """

    status: int
    headers: Mapping[str, str]
    text: str
    url: str = ""

    @classmethod
    def build(cls, status: int, headers: Mapping[str, str], text: str, url: str = "") -> TransportResponse:
        return cls(
            status=status,
            headers={str(k).lower(): str(v) for k, v in headers.items()},
            text=text,
            url=url,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises
        ------
        FindMeParseError
            If the body is not valid JSON.
        """
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise FindMeParseError(
                f"Invalid JSON from {self.url}: {self.text[:200]}",
                endpoint=self.url,
            ) from exc


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        ...


class HttpTransport:
    """aiohttp transport that replays cookies across all service hosts.

    Sign-in, account setup and the Find My service live on different hosts
    but correlate requests through cookies, so cookies are kept in one flat
    store and sent with every request.
    """

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._cookies: dict[str, str] = {}
        self._cookie_header: str = ""

    def _update_cookies(self, headers: Any) -> None:
        """Extract Set-Cookie headers and store them."""
        raw_cookies = headers.getall("Set-Cookie", [])
        changed = False
        for raw in raw_cookies:
            cookie: SimpleCookie = SimpleCookie()
            try:
                cookie.load(raw)
            except CookieError:
                _logger.debug("Ignoring unparseable cookie from response")
                continue
            for key, morsel in cookie.items():
                value = morsel.value
                if self._cookies.get(key) != value:
                    self._cookies[key] = value
                    changed = True

        if changed:
            self._cookie_header = "; ".join(f"{k}={v}" for k, v in self._cookies.items())

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        """POST *payload* as JSON and return the raw response.

        Non-2xx statuses are returned, not raised: callers decide which
        statuses are challenges and which are failures.

        Raises
        ------
        FindMeTransportError
            On connection errors and timeouts.
        FindMeParseError
            If the body cannot be decoded as text.
        """
        request_headers = dict(_BASE_HEADERS)
        if headers:
            request_headers.update(headers)
        if self._cookie_header:
            request_headers["Cookie"] = self._cookie_header

        _logger.debug("POST %s body=%s", url, redact_for_log(dict(payload)))

        try:
            async with self._http.post(
                url,
                data=json.dumps(payload, separators=(",", ":")),
                headers=request_headers,
                params=dict(params) if params else None,
                timeout=self._timeout,
            ) as resp:
                self._update_cookies(resp.headers)
                text = await resp.text()
                response = TransportResponse.build(resp.status, resp.headers, text, url)
        except UnicodeDecodeError as exc:
            raise FindMeParseError(f"Undecodable response body from {url}: {exc.reason}", endpoint=url) from exc
        except asyncio.TimeoutError as exc:
            raise FindMeTransportError(f"Request to {url} timed out", endpoint=url) from exc
        except aiohttp.ClientError as exc:
            raise FindMeTransportError(f"Request to {url} failed: {exc}", endpoint=url) from exc

        _logger.debug("POST %s -> HTTP %d", url, response.status)
        return response
