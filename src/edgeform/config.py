"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "edgeform"
    return Path.home() / ".local" / "share" / "edgeform"


@dataclass
class EdgeFormConfig:
    """Application-wide configuration."""

    data_dir: Path = field(default_factory=_default_data_dir)
    controller_url: str = "http://127.0.0.1:8080"
    timeout: float = 10.0
    verbose: bool = False

    @property
    def token_path(self) -> Path:
        return self.data_dir / "token"

    @classmethod
    def load(cls) -> EdgeFormConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_url = os.environ.get("EDGEFORM_CONTROLLER_URL")
        if env_url:
            config.controller_url = env_url.rstrip("/")

        env_timeout = os.environ.get("EDGEFORM_TIMEOUT")
        if env_timeout:
            config.timeout = float(env_timeout)

        return config
