"""Ubisoft session login and token caching."""

from ubi_auth.auth.login import UbiLoginClient
from ubi_auth.auth.protocol import CredentialStore, LoginClient
from ubi_auth.auth.token_cache import TokenCache, create_token_cache, is_credential_valid
from ubi_auth.auth.token_store import TokenStore

__all__ = [
    "CredentialStore",
    "LoginClient",
    "TokenCache",
    "TokenStore",
    "UbiLoginClient",
    "create_token_cache",
    "is_credential_valid",
]
