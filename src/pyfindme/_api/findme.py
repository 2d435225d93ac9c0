"""Find My device refresh.

Endpoint:
  - {findme_url}/fmipservice/client/web/refreshClient

Challenge statuses (450, 421) are returned to the caller untouched; the
client decides how to re-authenticate.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyfindme._constants import ORIGIN, REFRESH_CLIENT_PATH
from pyfindme._transport import Transport, TransportResponse
from pyfindme.exceptions import FindMeParseError, FindMeTransportError
from pyfindme.models.device import Device
from pyfindme.session import Session

_logger = logging.getLogger(__name__)


def build_refresh_request() -> dict[str, Any]:
    """Build the JSON body asking for every device on the account."""
    return {
        "clientContext": {
            "fmly": False,
            "shouldLocate": True,
            "selectedDevice": "all",
            "deviceListVersion": 1,
        }
    }


def refresh_url(session: Session) -> str:
    """Full refresh URL for *session*.

    Raises
    ------
    FindMeTransportError
        If account setup did not provide a Find My endpoint.
    """
    if not session.findme_url:
        raise FindMeTransportError("No Find My service endpoint; account setup did not provide one")
    return session.findme_url.rstrip("/") + REFRESH_CLIENT_PATH


async def refresh_client(session: Session, transport: Transport) -> TransportResponse:
    """POST the refresh request and return the raw response."""
    return await transport.post_json(
        refresh_url(session),
        build_refresh_request(),
        headers={"Origin": ORIGIN},
    )


def parse_devices(response: TransportResponse) -> list[Device]:
    """Parse the ``content`` list of a refresh response.

    Raises
    ------
    FindMeTransportError
        On a non-2xx status.
    FindMeParseError
        If the body is not JSON or its entries do not validate.
    """
    if not response.ok:
        raise FindMeTransportError(
            f"HTTP {response.status} from refreshClient: {response.text[:200]}",
            status_code=response.status,
            endpoint=response.url,
        )

    data = response.json()
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, list):
        raise FindMeParseError("refreshClient response has no 'content' list", endpoint=response.url)

    try:
        devices = [Device.model_validate(item) for item in content]
    except ValidationError as exc:
        raise FindMeParseError(f"Malformed device entry: {exc}", endpoint=response.url) from exc

    _logger.debug("refreshClient returned %d devices", len(devices))
    return devices
