from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_STORAGE_KEY = "countdowns"
DEFAULT_TIMELINE_MAX_ENTRIES = 30


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - COUNTDOWN_STORE_BACKEND: 'file' (default) or 'memory'
    - COUNTDOWN_STORE_PATH: path of the shared JSON store. Default is
      '<platform data dir>/countdown/shared.json'
    - COUNTDOWN_STORAGE_KEY: key the countdown blob is stored under. Default 'countdowns'
    - COUNTDOWN_TIMELINE_MAX_ENTRIES: cap on widget timeline snapshots (default: 30)
    - COUNTDOWN_LOG_LEVEL: logging level name (default: INFO)
    - COUNTDOWN_LOG_FILE: optional log file; logs go to stderr when unset
    """

    store_backend: str
    store_path: str
    storage_key: str
    timeline_max_entries: int
    log_level: str
    log_file: Optional[str]


def _get_env(name: str, default: str) -> str:
    return os.getenv(name) or default


def _parse_int(value: str, default: int, minimum: int = 1) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return max(parsed, minimum)


def default_store_path() -> Path:
    """Return the platform data directory location of the shared store file."""
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "countdown" / "shared.json"


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("COUNTDOWN_STORE_BACKEND", "file").strip().lower()
    if backend not in {"memory", "file"}:
        # Fallback to memory if unsupported
        backend = "memory"

    store_path = _get_env("COUNTDOWN_STORE_PATH", str(default_store_path())).strip()
    storage_key = _get_env("COUNTDOWN_STORAGE_KEY", DEFAULT_STORAGE_KEY).strip()
    max_entries = _parse_int(
        _get_env("COUNTDOWN_TIMELINE_MAX_ENTRIES", str(DEFAULT_TIMELINE_MAX_ENTRIES)),
        DEFAULT_TIMELINE_MAX_ENTRIES,
    )
    log_level = _get_env("COUNTDOWN_LOG_LEVEL", "INFO").strip().upper()
    log_file = os.getenv("COUNTDOWN_LOG_FILE") or None

    return Settings(
        store_backend=backend,
        store_path=store_path,
        storage_key=storage_key or DEFAULT_STORAGE_KEY,
        timeline_max_entries=max_entries,
        log_level=log_level,
        log_file=log_file,
    )
