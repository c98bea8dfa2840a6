"""Cached Ubisoft session tokens for the v2 and v3 app ids."""

from ubi_auth.auth import TokenCache, TokenStore, UbiLoginClient, create_token_cache
from ubi_auth.errors import (
    ChallengeRequired,
    LoginError,
    LoginErrorKind,
    ProtocolViolation,
    RateLimited,
    Unauthorized,
    UnknownLoginError,
)
from ubi_auth.models import AccountVariant, Credential
from ubi_auth.session import login_all

__all__ = [
    "AccountVariant",
    "ChallengeRequired",
    "Credential",
    "LoginError",
    "LoginErrorKind",
    "ProtocolViolation",
    "RateLimited",
    "TokenCache",
    "TokenStore",
    "UbiLoginClient",
    "Unauthorized",
    "UnknownLoginError",
    "create_token_cache",
    "login_all",
]
