"""Credential and account variant models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ubi_auth.config import UBI_APP_ID_V2, UBI_APP_ID_V3


class AccountVariant(str, Enum):
    """Which Ubi-AppId the login is made with. Same account either way."""

    V2 = "v2"
    V3 = "v3"

    @property
    def app_id(self) -> str:
        return UBI_APP_ID_V2 if self is AccountVariant.V2 else UBI_APP_ID_V3

    @property
    def token_filename(self) -> str:
        return f"auth_token_{self.value}.json"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Credential(BaseModel):
    """Session ticket returned by a successful login.

    Serialized with the Ubisoft field names (ticket, sessionId, ...) so the
    token files stay readable next to raw API responses.
    """

    token: str = Field(..., alias="ticket")
    session_id: str = Field(..., alias="sessionId")
    expiration: Optional[datetime] = None
    # Required: a file without it cannot be aged, so it loads as invalid
    obtained_at: datetime = Field(..., alias="obtainedAt")
    profile_id: Optional[str] = Field(None, alias="profileId")
    user_id: Optional[str] = Field(None, alias="userId")
    name_on_platform: Optional[str] = Field(None, alias="nameOnPlatform")
    space_id: Optional[str] = Field(None, alias="spaceId")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("expiration", "obtained_at")
    @classmethod
    def ensure_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def authorization_header(self) -> str:
        return f"Ubi_v1 t={self.token}"

    def to_headers(self, app_id: str) -> dict[str, str]:
        """Headers for authenticated calls to Ubisoft services."""
        return {
            "Authorization": self.authorization_header,
            "Ubi-SessionId": self.session_id,
            "Ubi-AppId": app_id,
        }
