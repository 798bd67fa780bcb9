"""
Configuration helpers for the knowledge base.

Resolves OS-specific default locations and environment overrides.
"""

import os
import sys
from pathlib import Path
from typing import List

APP_NAME = "kbase"
DB_FILENAME = "kbase.db"

DB_PATH_ENV = "KBASE_DB_PATH"
CORS_ORIGINS_ENV = "KBASE_CORS_ORIGINS"

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def get_data_dir() -> Path:
    """
    Get the OS-specific application data directory.

    Returns
    -------
    Path
        Directory holding the database (not created here)
    """
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif sys.platform == "win32":
        base = Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / APP_NAME


def get_default_db_path() -> Path:
    """
    Get the default database path.

    ``KBASE_DB_PATH`` takes precedence over the OS-specific location.
    """
    override = os.getenv(DB_PATH_ENV)
    if override:
        return Path(override)
    return get_data_dir() / DB_FILENAME


def get_cors_origins() -> List[str]:
    """Allowed CORS origins for the API, comma-separated in the environment."""
    raw = os.getenv(CORS_ORIGINS_ENV, DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
