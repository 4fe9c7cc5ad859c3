"""
Storage module for shortlinks (in-memory implementation).

Responsibilities:
    - Save links keyed by short code, rejecting taken codes
    - Track click counts and last-click timestamps
    - Provide lookup, newest-first listing and deletion

Design:
    - Reference implementation of the BaseStorage contract, used for local
      development and to keep tests fast and deterministic.
    - Plays the datastore role: every operation runs under the store's own
      lock, so insert-if-absent and click increments are atomic across the
      request threads FastAPI dispatches to.
"""

import itertools
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import ConflictError
from .base import BaseStorage


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize an empty store.

        Internal schema:
            self.links = {
                short_code: {
                    "short_code": str,
                    "target_url": str,
                    "total_clicks": int,
                    "created_at": datetime,
                    "last_clicked": Optional[datetime],
                }
            }
        """
        self.links: Dict[str, Dict[str, Any]] = {}
        # Insertion sequence breaks created_at ties in list_links.
        self._seq: Dict[str, int] = {}
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def insert_link(self, short_code: str, target_url: str) -> Dict[str, Any]:
        """
        Insert a new link.

        Raises:
            ConflictError: If the code is already stored.
        """
        with self._lock:
            if short_code in self.links:
                raise ConflictError(f'Short code "{short_code}" already exists.')
            row = {
                "short_code": short_code,
                "target_url": target_url,
                "total_clicks": 0,
                "created_at": _now(),
                "last_clicked": None,
            }
            self.links[short_code] = row
            self._seq[short_code] = next(self._counter)
            return dict(row)

    def get_link(self, short_code: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self.links.get(short_code)
            return dict(row) if row else None

    def record_click(self, short_code: str) -> Optional[str]:
        """
        Increment the click count and stamp last_clicked.

        Returns:
            Optional[str]: Target URL, or None when the code is unknown.
        """
        with self._lock:
            row = self.links.get(short_code)
            if row is None:
                return None
            row["total_clicks"] += 1
            row["last_clicked"] = _now()
            return row["target_url"]

    def list_links(self) -> List[Dict[str, Any]]:
        with self._lock:
            rows = sorted(
                self.links.values(),
                key=lambda r: (r["created_at"], self._seq[r["short_code"]]),
                reverse=True,
            )
            return [dict(r) for r in rows]

    def delete_link(self, short_code: str) -> bool:
        with self._lock:
            if short_code not in self.links:
                return False
            del self.links[short_code]
            del self._seq[short_code]
            return True
