"""Ubisoft session login (POST /v3/profiles/sessions).

One request per call, no retries: the endpoint is rate limited and callers
are expected to go through TokenCache.
"""

import base64
import re
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from ubi_auth.config import (
    HTTP_TIMEOUT_SECONDS,
    UBI_EMAIL,
    UBI_PASSWORD,
    UBI_SESSIONS_URL,
    UBI_USER_AGENT,
)
from ubi_auth.errors import ProtocolViolation, UnknownLoginError, error_for_status
from ubi_auth.models import AccountVariant, Credential, utcnow
from ubi_auth.utils.logger import get_logger, mask

logger = get_logger("ubi_auth.auth.login")

SESSION_ID_HEADER = "Ubi-SessionId"

_FRACTION_RE = re.compile(r"\.(\d+)")


def basic_auth_value(email: str, password: str) -> str:
    encoded = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


def parse_expiration(value: Any) -> datetime | None:
    """Parse the `expiration` field of a session response.

    Ubisoft sends 7 fractional digits and a trailing Z; both are normalized
    before fromisoformat. Anything unparseable yields None.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("login.expiration_unparseable", value=value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class UbiLoginClient:
    """Performs the remote login for either app id variant.

    Pass an existing httpx.AsyncClient to share a connection pool; otherwise
    the client creates (and owns) its own.
    """

    def __init__(
        self,
        email: str = UBI_EMAIL,
        password: str = UBI_PASSWORD,
        user_agent: str = UBI_USER_AGENT,
        sessions_url: str = UBI_SESSIONS_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._email = email
        self._password = password
        self._user_agent = user_agent
        self._sessions_url = sessions_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(HTTP_TIMEOUT_SECONDS))

    def _headers(self, variant: AccountVariant) -> dict[str, str]:
        return {
            "User-Agent": self._user_agent,
            "Authorization": basic_auth_value(self._email, self._password),
            "Ubi-AppId": variant.app_id,
            "Connection": "Keep-Alive",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def login(self, variant: AccountVariant) -> Credential:
        """Create a new session and return its credential.

        Raises Unauthorized (401), ChallengeRequired (409), RateLimited (429),
        UnknownLoginError for other failures and ProtocolViolation when the
        response lacks the session id header or the ticket.
        """
        log = logger.bind(variant=variant.value)
        log.info("login.request", url=self._sessions_url)
        try:
            response = await self._http.post(
                self._sessions_url,
                headers=self._headers(variant),
                json={"rememberMe": True},
            )
        except httpx.HTTPError as e:
            log.error("login.transport_error", error=str(e), error_type=type(e).__name__)
            raise UnknownLoginError(message=f"Login request failed: {e}") from e

        if not response.is_success:
            error = error_for_status(response.status_code)
            log.error("login.failed", status=response.status_code, kind=error.kind.value)
            raise error

        session_id = response.headers.get(SESSION_ID_HEADER)
        if not session_id:
            log.error("login.missing_session_id", status=response.status_code)
            raise ProtocolViolation(status=response.status_code)

        credential = self._credential_from_response(response, session_id)
        log.info(
            "login.success",
            session_id=mask(session_id),
            expiration=credential.expiration.isoformat() if credential.expiration else None,
        )
        return credential

    def _credential_from_response(self, response: httpx.Response, session_id: str) -> Credential:
        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolViolation("Login response body is not JSON.", status=response.status_code) from e
        if not isinstance(body, dict) or not body.get("ticket"):
            raise ProtocolViolation("Login response has no ticket.", status=response.status_code)

        try:
            return Credential(
                token=body["ticket"],
                session_id=session_id,
                expiration=parse_expiration(body.get("expiration")),
                obtained_at=utcnow(),
                profile_id=body.get("profileId"),
                user_id=body.get("userId"),
                name_on_platform=body.get("nameOnPlatform"),
                space_id=body.get("spaceId"),
            )
        except ValidationError as e:
            raise ProtocolViolation("Login response has malformed fields.", status=response.status_code) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "UbiLoginClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
