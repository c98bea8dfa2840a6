"""On-disk token files, one JSON document per app id variant.

Missing or unreadable files load as None; write failures are logged and
reported through the return value rather than raised.
"""

from pathlib import Path

from pydantic import ValidationError

from ubi_auth.config import TOKEN_DIR
from ubi_auth.models import AccountVariant, Credential
from ubi_auth.utils.logger import get_logger

logger = get_logger("ubi_auth.auth.token_store")


class TokenStore:
    """File-backed credential store under a private data directory."""

    def __init__(self, token_dir: str | Path | None = None):
        self._token_dir = Path(token_dir) if token_dir is not None else TOKEN_DIR

    @property
    def token_dir(self) -> Path:
        return self._token_dir

    def path_for(self, variant: AccountVariant) -> Path:
        return self._token_dir / variant.token_filename

    def load(self, variant: AccountVariant) -> Credential | None:
        """Read the credential for variant. No-op (None) if file missing or invalid."""
        path = self.path_for(variant)
        if not path.exists():
            return None
        try:
            return Credential.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(
                "token_store.load_error",
                variant=variant.value,
                path=str(path),
                error=str(e),
            )
            return None

    def save(self, variant: AccountVariant, credential: Credential) -> bool:
        """Write the credential to disk, replacing the previous file."""
        path = self.path_for(variant)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                credential.model_dump_json(by_alias=True, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(
                "token_store.save_error",
                variant=variant.value,
                path=str(path),
                error=str(e),
            )
            return False
        logger.debug("token_store.saved", variant=variant.value, path=str(path))
        return True

    def clear(self, variant: AccountVariant) -> bool:
        """Delete the token file. Returns True if a file was removed."""
        path = self.path_for(variant)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(
                "token_store.clear_error",
                variant=variant.value,
                path=str(path),
                error=str(e),
            )
            return False
        return True
