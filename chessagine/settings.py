"""Environment-driven configuration for ChessAgine.

All knobs are read from CHESSAGINE_* environment variables once, at
startup, into an immutable Settings record that is passed to whatever
needs it. The Gemini API key is left to google-genai, which reads
GEMINI_API_KEY / GOOGLE_API_KEY itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_ORACLE_URL = "https://stockfish.online/api/s/v2.php"
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    oracle_url: str = DEFAULT_ORACLE_URL
    oracle_timeout: float = 10.0
    model: str = DEFAULT_MODEL
    host: str = "127.0.0.1"
    port: int = 8089
    log_level: str = "INFO"
    log_file: str | None = None


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Returns:
        Settings with defaults for anything unset.

    Raises:
        ValueError: If a numeric variable cannot be parsed.
    """
    if env is None:
        env = os.environ

    return Settings(
        oracle_url=env.get("CHESSAGINE_ORACLE_URL") or DEFAULT_ORACLE_URL,
        oracle_timeout=_number(env, "CHESSAGINE_ORACLE_TIMEOUT", 10.0, float),
        model=env.get("CHESSAGINE_MODEL") or DEFAULT_MODEL,
        host=env.get("CHESSAGINE_HOST") or "127.0.0.1",
        port=_number(env, "CHESSAGINE_PORT", 8089, int),
        log_level=(env.get("CHESSAGINE_LOG_LEVEL") or "INFO").upper(),
        log_file=env.get("CHESSAGINE_LOG_FILE") or None,
    )
