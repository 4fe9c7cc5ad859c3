"""
Storage factory – switch storage backend from config (lazy env version)
======================================================================

Centralizes selection of the storage backend (in-memory vs PostgreSQL) so the
rest of the app can stay ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- LINKS_STORAGE_BACKEND: "memory" or "postgres" (default: postgres when
                         DATABASE_URL is set, else memory)
- DATABASE_URL:          DSN string if backend=="postgres"
- LINKS_DB_SSLMODE, LINKS_DB_POOL_MIN, LINKS_DB_POOL_MAX, LINKS_DB_TIMEOUT:
                         pool tuning, see shortlinks.config
"""

import logging
import os
from typing import Optional

from shortlinks.config import _get_float, _get_int, default_backend
from shortlinks.storage.base import BaseStorage
from shortlinks.storage.storage import Storage

log = logging.getLogger("shortlinks.storage")


def get_storage(backend: Optional[str] = None, **kwargs) -> BaseStorage:
    """
    Return a storage backend based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" or "postgres". If omitted, resolved from the environment.
    kwargs : dict
        Extra args passed to the backend constructor. For postgres, use dsn="...".

    Raises
    ------
    ValueError
        Unknown backend, or postgres selected without a DSN.
    """
    be = (backend or default_backend()).strip().lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    if be == "postgres":
        dsn = kwargs.pop("dsn", None) or os.getenv("DATABASE_URL", "")
        if not dsn:
            raise ValueError("DATABASE_URL is required for postgres backend")
        # Local import to avoid loading the driver when not using postgres
        from shortlinks.storage.db_storage import DBStorage

        min_size = max(1, _get_int("LINKS_DB_POOL_MIN", 1))
        options = {
            "min_size": min_size,
            "max_size": max(min_size, _get_int("LINKS_DB_POOL_MAX", 10)),
            "timeout": _get_float("LINKS_DB_TIMEOUT", 10.0),
            "sslmode": os.getenv("LINKS_DB_SSLMODE", "").strip(),
        }
        options.update(kwargs)
        return DBStorage(dsn=dsn, **options)

    raise ValueError(f"Unknown storage backend: {be!r}")
