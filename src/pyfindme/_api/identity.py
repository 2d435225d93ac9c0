"""Sign-in (identify phase).

Endpoint:
  - https://idmsa.apple.com/appleauth/auth/signin

The result of the sign-in is reported in response headers, not in the body:
``X-Apple-I-Rscd`` carries the auth result code, ``X-Apple-Session-Token``
and ``X-Apple-ID-Account-Country`` carry what account setup needs next.
"""

from __future__ import annotations

import logging
from typing import Any

from pyfindme._constants import (
    ACCOUNT_COUNTRY_HEADER,
    AUTH_CONTINUE_CODE,
    AUTH_RESULT_HEADER,
    OAUTH_HEADERS,
    SESSION_TOKEN_HEADER,
    SIGN_IN_URL,
)
from pyfindme._redact import redact_for_log
from pyfindme._transport import Transport, TransportResponse
from pyfindme.config import FindMeConfig
from pyfindme.exceptions import FindMeInvalidCredentialsError, FindMeMissingTokenError
from pyfindme.session import Session

_logger = logging.getLogger(__name__)

SIGN_IN_PARAMS: dict[str, str] = {"isRememberMeEnabled": "true"}


def build_sign_in_request(config: FindMeConfig) -> dict[str, Any]:
    """Build the JSON body for the sign-in endpoint."""
    return {
        "rememberMe": True,
        "accountName": config.username,
        "password": config.password,
    }


def parse_sign_in_response(response: TransportResponse) -> Session:
    """Extract session token and account country from sign-in headers.

    Parameters
    ----------
    response : TransportResponse
        Raw sign-in response.

    Returns
    -------
    Session
        A fresh session carrying ``account_country_code`` and
        ``session_token``; no service endpoint yet.

    Raises
    ------
    FindMeInvalidCredentialsError
        If the auth result code is present and is not the continue code.
    FindMeMissingTokenError
        If the session token or account country header is missing.
    """
    _logger.debug("Sign-in response HTTP %d headers=%s", response.status, redact_for_log(dict(response.headers)))

    result_code = response.header(AUTH_RESULT_HEADER)
    if result_code is not None and result_code.strip() != AUTH_CONTINUE_CODE:
        raise FindMeInvalidCredentialsError(
            f"Sign-in failed: {AUTH_RESULT_HEADER}={result_code} (HTTP {response.status})",
            code=result_code.strip(),
            endpoint=SIGN_IN_URL,
        )

    session_token = response.header(SESSION_TOKEN_HEADER)
    if not session_token:
        raise FindMeMissingTokenError("Sign-in response missing session token", endpoint=SIGN_IN_URL)

    country = response.header(ACCOUNT_COUNTRY_HEADER)
    if not country:
        raise FindMeMissingTokenError("Sign-in response missing account country", endpoint=SIGN_IN_URL)

    return Session(account_country_code=country, session_token=session_token)


async def sign_in(config: FindMeConfig, transport: Transport) -> Session:
    """Run the identify phase and return the partially authenticated session."""
    response = await transport.post_json(
        SIGN_IN_URL,
        build_sign_in_request(config),
        headers=OAUTH_HEADERS,
        params=SIGN_IN_PARAMS,
    )
    return parse_sign_in_response(response)
