"""Internal constants shared across the library."""

SIGN_IN_URL = "https://idmsa.apple.com/appleauth/auth/signin"
SETUP_URL = "https://setup.icloud.com/setup/ws/1/accountLogin"
REFRESH_CLIENT_PATH = "/fmipservice/client/web/refreshClient"
ORIGIN = "https://www.icloud.com"

# ------------------------------------------------------------------
# Sign-in (identify phase)
# ------------------------------------------------------------------

OAUTH_CLIENT_ID = "d39ba9916b7251055b22c7f910e2ea796ee65e98b2ddecea8f5dde8d9d1a815d"

OAUTH_HEADERS: dict[str, str] = {
    "X-Apple-OAuth-Client-Id": OAUTH_CLIENT_ID,
    "X-Apple-OAuth-Client-Type": "firstPartyAuth",
    "X-Apple-OAuth-Redirect-URI": ORIGIN,
    "X-Apple-OAuth-Require-Grant-Code": "true",
    "X-Apple-OAuth-Response-Mode": "web_message",
    "X-Apple-OAuth-Response-Type": "code",
    "X-Apple-OAuth-State": "auth-cb0b80f8-7134-11ef-bfeb-fae44b21d45c",
    "X-Apple-Widget-Key": OAUTH_CLIENT_ID,
}

AUTH_RESULT_HEADER = "X-Apple-I-Rscd"
SESSION_TOKEN_HEADER = "X-Apple-Session-Token"
ACCOUNT_COUNTRY_HEADER = "X-Apple-ID-Account-Country"

#: ``X-Apple-I-Rscd`` value meaning "two-factor step accepted implicitly, continue".
AUTH_CONTINUE_CODE = "409"

# ------------------------------------------------------------------
# Refresh challenges
# ------------------------------------------------------------------

#: Session expired: both sign-in and account setup must be redone.
STATUS_SESSION_EXPIRED = 450
#: Session stale: account setup alone refreshes it.
STATUS_SESSION_STALE = 421
CHALLENGE_STATUSES: frozenset[int] = frozenset({STATUS_SESSION_EXPIRED, STATUS_SESSION_STALE})

# ------------------------------------------------------------------
# Gazetteer filtering
# ------------------------------------------------------------------

POPULATION_THRESHOLD = 40_000
POPULATED_PLACE_CLASS = "P"
SECTION_OF_PLACE_CODE = "PPLX"
US_COUNTRY_CODE = "US"

DEFAULT_PLACE = "Burlington, Vermont"
