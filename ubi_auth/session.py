"""Warm up credentials for every app id variant at startup."""

from collections.abc import Iterable

from ubi_auth.auth.token_cache import TokenCache
from ubi_auth.errors import LoginError
from ubi_auth.models import AccountVariant
from ubi_auth.utils.logger import bind_context, unbind_context, get_logger

logger = get_logger("ubi_auth.session")


async def login_all(
    cache: TokenCache,
    variants: Iterable[AccountVariant] = tuple(AccountVariant),
) -> dict[AccountVariant, LoginError]:
    """Make sure each variant has a valid credential.

    Variants are logged in one after another. Login failures are logged and
    collected instead of raised, so one bad variant does not block the other.
    Returns the failures keyed by variant (empty when all succeeded).
    """
    failures: dict[AccountVariant, LoginError] = {}
    for variant in variants:
        bind_context(variant=variant.value)
        try:
            await cache.get_token(variant)
        except LoginError as e:
            logger.error("session.login_failed", kind=e.kind.value, status=e.status, error=str(e))
            failures[variant] = e
        finally:
            unbind_context("variant")
    if not failures:
        logger.info("session.ready")
    return failures
