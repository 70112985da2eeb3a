"""Configuration for note-sync.

All settings come from environment variables and are read when
load_config() is called.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator

# Environment variable names
API_BASE_ENV_VAR = "NOTE_SYNC_API_BASE"
TOKEN_STORE_ENV_VAR = "NOTE_SYNC_TOKEN_STORE"
DATA_DIR_ENV_VAR = "NOTE_SYNC_DATA_DIR"
LOG_LEVEL_ENV_VAR = "NOTE_SYNC_LOG_LEVEL"
TIMEOUT_ENV_VAR = "NOTE_SYNC_TIMEOUT"

DEFAULT_API_BASE = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0


class Config(BaseModel):
    """Runtime configuration.

    Attributes:
        api_base: Remote server base URL (no trailing slash)
        token_store: Token persistence backend
        data_dir: Directory used by the file token store
        log_level: Logging level name
        timeout: Request timeout in seconds
    """

    api_base: str = DEFAULT_API_BASE
    token_store: Literal["keyring", "file"] = "keyring"
    data_dir: Path = Path.home() / ".note-sync"
    log_level: str = "INFO"
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return value


def get_api_base() -> str:
    """Get the remote base URL from NOTE_SYNC_API_BASE.

    Default: http://localhost:8080

    Returns:
        Base URL without trailing slash
    """
    value = os.environ.get(API_BASE_ENV_VAR, "").strip()
    return (value or DEFAULT_API_BASE).rstrip("/")


def get_data_dir() -> Path:
    """Get the data directory for file-based token storage.

    Returns:
        NOTE_SYNC_DATA_DIR if set, otherwise ~/.note-sync
    """
    env_dir = os.environ.get(DATA_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".note-sync"


def load_config() -> Config:
    """Build the configuration from the environment.

    Returns:
        Config instance

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    return Config(
        api_base=get_api_base(),
        token_store=os.environ.get(TOKEN_STORE_ENV_VAR, "keyring").strip().lower(),
        data_dir=get_data_dir(),
        log_level=os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").strip().upper(),
        timeout=os.environ.get(TIMEOUT_ENV_VAR, DEFAULT_TIMEOUT),
    )


def format_config_error(error: ValidationError) -> str:
    """Summarize a configuration ValidationError on one line."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in error.errors(include_url=False)
    )
    return f"Invalid configuration: {problems}"
