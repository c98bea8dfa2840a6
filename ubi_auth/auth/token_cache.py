"""Session token cache with on-disk persistence and single-flight refresh.

A credential is reused while it is valid:
- with an expiration: until 5 minutes before it expires
- without one: for 30 minutes after it was obtained

Only when neither memory nor the token file holds a valid credential is the
login endpoint called, and concurrent callers for the same variant share that
one request.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import httpx

from ubi_auth.auth.login import UbiLoginClient
from ubi_auth.auth.protocol import CredentialStore, LoginClient
from ubi_auth.auth.token_store import TokenStore
from ubi_auth.config import TOKEN_EXPIRY_MARGIN_SECONDS, TOKEN_UNTRACKED_TTL_SECONDS
from ubi_auth.models import AccountVariant, Credential, utcnow
from ubi_auth.utils.logger import get_logger, mask

logger = get_logger("ubi_auth.auth.token_cache")

DEFAULT_EXPIRY_MARGIN = timedelta(seconds=TOKEN_EXPIRY_MARGIN_SECONDS)
DEFAULT_UNTRACKED_TTL = timedelta(seconds=TOKEN_UNTRACKED_TTL_SECONDS)


def is_credential_valid(
    credential: Credential | None,
    now: datetime,
    expiry_margin: timedelta = DEFAULT_EXPIRY_MARGIN,
    untracked_ttl: timedelta = DEFAULT_UNTRACKED_TTL,
) -> bool:
    """Return True if the credential can still be used at `now`."""
    if credential is None:
        return False
    if credential.expiration is None:
        return now - credential.obtained_at < untracked_ttl
    return now + expiry_margin < credential.expiration


class TokenCache:
    """Hands out valid credentials per account variant, logging in only when needed.

    Owned by its caller; construct one per process (or per test) and pass it
    to whatever needs Ubisoft credentials.
    """

    def __init__(
        self,
        login_client: LoginClient,
        store: CredentialStore,
        expiry_margin: timedelta = DEFAULT_EXPIRY_MARGIN,
        untracked_ttl: timedelta = DEFAULT_UNTRACKED_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._login_client = login_client
        self._store = store
        self._expiry_margin = expiry_margin
        self._untracked_ttl = untracked_ttl
        self._clock = clock
        self._credentials: dict[AccountVariant, Credential] = {}
        self._inflight: dict[AccountVariant, asyncio.Task[Credential]] = {}

    def is_valid(self, credential: Credential | None) -> bool:
        return is_credential_valid(
            credential,
            self._clock(),
            expiry_margin=self._expiry_margin,
            untracked_ttl=self._untracked_ttl,
        )

    def cached(self, variant: AccountVariant) -> Credential | None:
        """In-memory credential for variant, valid or not. No I/O."""
        return self._credentials.get(variant)

    def invalidate(self, variant: AccountVariant) -> None:
        """Forget the in-memory credential. The token file is left alone."""
        self._credentials.pop(variant, None)

    async def get_token(self, variant: AccountVariant) -> Credential:
        """Return a valid credential for variant, logging in if none is cached.

        Login failures (LoginError subclasses) propagate unchanged and leave
        the cached state untouched.
        """
        credential = self._credentials.get(variant)
        if self.is_valid(credential):
            logger.debug("token_cache.hit", variant=variant.value, source="memory")
            return credential

        stored = self._store.load(variant)
        if self.is_valid(stored):
            self._credentials[variant] = stored
            logger.debug("token_cache.hit", variant=variant.value, source="disk")
            return stored

        logger.info(
            "token_cache.miss",
            variant=variant.value,
            reason="expired" if (credential or stored) else "missing",
        )
        return await self._refresh_once(variant)

    async def refresh(self, variant: AccountVariant) -> Credential:
        """Log in again regardless of the cached credential."""
        return await self._refresh_once(variant)

    async def get_headers(self, variant: AccountVariant) -> dict[str, str]:
        """Authorization headers for variant, refreshing the credential if needed."""
        credential = await self.get_token(variant)
        return credential.to_headers(variant.app_id)

    async def _refresh_once(self, variant: AccountVariant) -> Credential:
        task = self._inflight.get(variant)
        if task is None:
            task = asyncio.create_task(self._login_and_store(variant))
            self._inflight[variant] = task
        else:
            logger.debug("token_cache.join_inflight", variant=variant.value)
        # A cancelled waiter must not cancel the login other callers are awaiting
        return await asyncio.shield(task)

    async def _login_and_store(self, variant: AccountVariant) -> Credential:
        try:
            credential = await self._login_client.login(variant)
            self._credentials[variant] = credential
            if not self._store.save(variant, credential):
                logger.warning("token_cache.persist_failed", variant=variant.value)
            if not self.is_valid(credential):
                logger.warning(
                    "token_cache.fresh_credential_near_expiry",
                    variant=variant.value,
                    expiration=credential.expiration.isoformat() if credential.expiration else None,
                )
            logger.info(
                "token_cache.refreshed",
                variant=variant.value,
                session_id=mask(credential.session_id),
            )
            return credential
        finally:
            self._inflight.pop(variant, None)

    async def aclose(self) -> None:
        """Close the login client's HTTP resources if it has any."""
        close = getattr(self._login_client, "aclose", None)
        if close is not None:
            await close()


def create_token_cache(
    token_dir: str | Path | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> TokenCache:
    """Build a TokenCache wired to the real login endpoint and token files from config."""
    return TokenCache(
        login_client=UbiLoginClient(http_client=http_client),
        store=TokenStore(token_dir),
    )
