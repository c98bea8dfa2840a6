"""Login failures, one exception per error kind."""

from enum import Enum
from typing import Optional


class LoginErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    CHALLENGE_REQUIRED = "challenge_required"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"
    PROTOCOL_VIOLATION = "protocol_violation"


class LoginError(Exception):
    """Base class for failed session logins."""

    kind: LoginErrorKind = LoginErrorKind.UNKNOWN
    default_message = "Login failed."

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(message or self.default_message)


class Unauthorized(LoginError):
    kind = LoginErrorKind.UNAUTHORIZED
    default_message = "Account does not exist or the password is wrong."


class ChallengeRequired(LoginError):
    kind = LoginErrorKind.CHALLENGE_REQUIRED
    default_message = "Captcha or account verification needed."


class RateLimited(LoginError):
    kind = LoginErrorKind.RATE_LIMITED
    default_message = "Too many requests. Rate limit hit."


class UnknownLoginError(LoginError):
    kind = LoginErrorKind.UNKNOWN

    def __init__(self, status: Optional[int] = None, message: Optional[str] = None):
        if message is None:
            message = f"Login failed with HTTP {status}." if status is not None else "Login request failed."
        super().__init__(message, status=status)


class ProtocolViolation(LoginError):
    kind = LoginErrorKind.PROTOCOL_VIOLATION
    default_message = "Missing Ubi-SessionId header in login response."


_STATUS_ERRORS: dict[int, type[LoginError]] = {
    401: Unauthorized,
    409: ChallengeRequired,
    429: RateLimited,
}


def error_for_status(status: int) -> LoginError:
    """Map a non-2xx login status to its typed error."""
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        return UnknownLoginError(status)
    return error_cls(status=status)
