"""
Configuration - Environment settings and logging setup.

Environment variables:
    TICTACTOE_ENV           Environment name (default: development)
    TICTACTOE_AI_DELAY_MS   Pause before an automatic AI reply (default: 700)
    TICTACTOE_AUTO_AI       Schedule AI replies automatically (default: true)
    TICTACTOE_SESSION_TTL   Idle seconds before a session is purged (default: 3600)
    TICTACTOE_LOG_LEVEL     Root log level (default: INFO)
    ALLOWED_ORIGINS         Comma separated CORS origins (default: *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Runtime settings for the API and CLI."""
    env: str = "development"
    ai_delay_ms: int = 700
    auto_ai: bool = True
    session_ttl: int = 3600
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def ai_delay_seconds(self) -> float:
        return self.ai_delay_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from the environment (os.environ by default)."""
        env = os.environ if environ is None else environ
        return cls(
            env=env.get("TICTACTOE_ENV", "development"),
            ai_delay_ms=int(env.get("TICTACTOE_AI_DELAY_MS", "700")),
            auto_ai=env.get("TICTACTOE_AUTO_AI", "true").strip().lower() in _TRUE_VALUES,
            session_ttl=int(env.get("TICTACTOE_SESSION_TTL", "3600")),
            log_level=env.get("TICTACTOE_LOG_LEVEL", "INFO").upper(),
            allowed_origins=[
                origin.strip()
                for origin in env.get("ALLOWED_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )


def configure_logging(level: str | int = "INFO"):
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
