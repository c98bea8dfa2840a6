"""Collaborator interfaces used by the token cache."""

from typing import Protocol

from ubi_auth.models import AccountVariant, Credential


class LoginClient(Protocol):
    """Performs the remote session login for one app id variant."""

    async def login(self, variant: AccountVariant) -> Credential:
        """Return a fresh credential or raise a LoginError subclass."""
        ...


class CredentialStore(Protocol):
    """Durable storage of one credential per variant."""

    def load(self, variant: AccountVariant) -> Credential | None:
        """Return the stored credential, or None if missing or unreadable. Never raises."""
        ...

    def save(self, variant: AccountVariant, credential: Credential) -> bool:
        """Persist the credential, overwriting any previous one. Returns success."""
        ...
