"""Session state — the auth token, passed explicitly to whoever needs it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def is_authenticated(token: str | None) -> bool:
    return bool(token)


@dataclass
class SessionState:
    """Holds the controller token for one client session."""

    token: str = ""

    @property
    def is_authenticated(self) -> bool:
        return is_authenticated(self.token)

    def set_token(self, token: str) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = ""


class TokenStore:
    """Keeps the CLI's session token on disk between invocations."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> SessionState:
        if not self.path.is_file():
            return SessionState()
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except OSError:
            logger.warning("Failed to read token from %s", self.path)
            return SessionState()
        return SessionState(token=token)

    def save(self, session: SessionState) -> None:
        if not session.is_authenticated:
            self.clear()
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(mode=0o600, exist_ok=True)
        self.path.chmod(0o600)
        self.path.write_text(session.token, encoding="utf-8")
        logger.debug("Saved session token to %s", self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
