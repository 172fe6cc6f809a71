"""Persistent storage for the bearer token.

The token is the only client-side state that outlives the process. It is kept
as a single file so a restarted client can resume the previous session.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class TokenStore:
    """File-backed store for the opaque bearer token."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def get(self) -> str | None:
        """Return the persisted token, or None if there is none."""
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def set(self, token: str) -> None:
        """Persist a token, replacing any previous one."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.warning("Could not restrict permissions on %s", self.path)

    def clear(self) -> None:
        """Remove the persisted token. Safe to call when none is stored."""
        self.path.unlink(missing_ok=True)
