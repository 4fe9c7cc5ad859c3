"""
Runtime configuration for shortlinks
====================================

Simple settings module that reads from environment variables (only here),
and exposes a stable `settings` object for the rest of the codebase.
A `.env` file in the working directory is loaded first, if present.

Server
------
- HOST                  : listen address (default "0.0.0.0")
- PORT                  : listen port (default 3000)
- APP_VERSION           : version reported by /healthz (default "1.0")
- LINKS_LOG_LEVEL       : root log level (default "INFO")

Storage
-------
Storage variables (LINKS_STORAGE_BACKEND, DATABASE_URL, LINKS_DB_*) are read
lazily by `shortlinks.storage.storage_factory.get_storage`, which owns their
defaults and clamping; `default_backend` below resolves the backend name.

Short codes
-----------
- LINKS_CODE_LENGTH     : generated code length; default 7, clamped to [6, 8]
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        return default


def default_backend() -> str:
    """Backend implied by the environment when LINKS_STORAGE_BACKEND is unset."""
    explicit = os.getenv("LINKS_STORAGE_BACKEND", "").strip().lower()
    if explicit:
        return explicit
    return "postgres" if os.getenv("DATABASE_URL") else "memory"


class _Settings:
    # -------- Server --------
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _get_int("PORT", 3000)
    VERSION: str = os.getenv("APP_VERSION", "1.0")
    LOG_LEVEL: str = os.getenv("LINKS_LOG_LEVEL", "INFO").strip().upper()

    # -------- Short codes --------
    CODE_LENGTH: int = max(6, min(8, _get_int("LINKS_CODE_LENGTH", 7)))


settings = _Settings()
