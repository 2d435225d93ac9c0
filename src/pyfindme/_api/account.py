"""Account setup (establish phase).

Endpoint:
  - https://setup.icloud.com/setup/ws/1/accountLogin

Exchanges the sign-in session token for the account's web service URLs.
Only ``webservices.findme.url`` is used.
"""

from __future__ import annotations

import logging
from typing import Any

from pyfindme._constants import ORIGIN, SETUP_URL
from pyfindme._transport import Transport, TransportResponse
from pyfindme.exceptions import FindMeMissingTokenError, FindMeParseError, FindMeTransportError
from pyfindme.session import Session

_logger = logging.getLogger(__name__)


def build_setup_request(session: Session) -> dict[str, Any]:
    """Build the JSON body for the account setup endpoint.

    Raises
    ------
    FindMeMissingTokenError
        If the identify phase has not populated the session.
    """
    if not session.account_country_code or not session.session_token:
        raise FindMeMissingTokenError(
            "Account setup requires a session token and account country",
            endpoint=SETUP_URL,
        )
    return {
        "accountCountryCode": session.account_country_code,
        "dsWebAuthToken": session.session_token,
        "extended_login": True,
    }


def find_findme_url(data: Any) -> str | None:
    """Return ``webservices.findme.url`` from a setup body, if present."""
    if not isinstance(data, dict):
        return None
    webservices = data.get("webservices")
    findme = webservices.get("findme") if isinstance(webservices, dict) else None
    url = findme.get("url") if isinstance(findme, dict) else None
    return url if isinstance(url, str) and url else None


def parse_setup_response(response: TransportResponse) -> str | None:
    """Extract the Find My service URL from the setup response.

    Raises
    ------
    FindMeTransportError
        On a non-2xx status.
    FindMeParseError
        If the body is not a JSON object.
    """
    if not response.ok:
        raise FindMeTransportError(
            f"HTTP {response.status} from account setup: {response.text[:200]}",
            status_code=response.status,
            endpoint=SETUP_URL,
        )

    data = response.json()
    if not isinstance(data, dict):
        raise FindMeParseError("Account setup response is not a JSON object", endpoint=SETUP_URL)

    url = find_findme_url(data)
    if url is None:
        _logger.warning("Account setup response has no findme service URL")
    return url


async def establish(session: Session, transport: Transport) -> Session:
    """Run the establish phase and return the session with its endpoint set.

    The endpoint is cleared when the response does not carry one.
    """
    response = await transport.post_json(
        SETUP_URL,
        build_setup_request(session),
        headers={"Origin": ORIGIN},
    )
    return session.model_copy(update={"findme_url": parse_setup_response(response)})
