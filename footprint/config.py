"""
config.py – Load and validate optional environment variables.

All configuration is loaded from environment variables (or a .env file at
the repository root or the current working directory). Every variable has
a default; call `get_config()` to obtain a validated Config object.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Repository root: the directory holding footprint/ and footprint_api/
_REPO_ROOT = Path(__file__).resolve().parent.parent

# Load .env from the repo root first, then the working directory (cwd overrides).
_env_repo = _REPO_ROOT / ".env"
_env_cwd = Path.cwd() / ".env"
if _env_repo.exists():
    load_dotenv(_env_repo)
if _env_cwd.exists() and _env_cwd != _env_repo:
    load_dotenv(_env_cwd, override=True)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_OUTDIR = "out"
DEFAULT_CORS_ORIGINS = "*"
DEFAULT_MAX_UPLOAD_BYTES = 5_000_000

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass
class Config:
    """Validated runtime configuration."""

    log_level: str = DEFAULT_LOG_LEVEL
    outdir: Path = field(default_factory=lambda: Path(DEFAULT_OUTDIR))
    cors_origins: list[str] = field(default_factory=lambda: [DEFAULT_CORS_ORIGINS])
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _parse_origins(raw: str) -> list[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or [DEFAULT_CORS_ORIGINS]


def get_config() -> Config:
    """
    Read environment variables, validate them, and return a Config.

    Raises
    ------
    EnvironmentError
        If a variable is set to a value that cannot be used.
    """
    log_level = os.environ.get("FOOTPRINT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise EnvironmentError(
            f"FOOTPRINT_LOG_LEVEL must be one of {', '.join(sorted(_LOG_LEVELS))}, "
            f"got '{log_level}'"
        )

    raw_limit = os.environ.get("FOOTPRINT_MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))
    try:
        max_upload_bytes = int(raw_limit)
    except ValueError:
        max_upload_bytes = 0
    if max_upload_bytes <= 0:
        raise EnvironmentError(
            f"FOOTPRINT_MAX_UPLOAD_BYTES must be a positive integer, got '{raw_limit}'"
        )

    return Config(
        log_level=log_level,
        outdir=Path(os.environ.get("FOOTPRINT_OUTDIR") or DEFAULT_OUTDIR),
        cors_origins=_parse_origins(os.environ.get("FOOTPRINT_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
        max_upload_bytes=max_upload_bytes,
    )
