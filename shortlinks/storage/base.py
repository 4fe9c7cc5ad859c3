"""
Base storage interface for shortlinks.

Purpose:
    Define a small, stable contract that the in-memory and PostgreSQL
    backends implement, so the registry never needs to know where data lives.

Contract:
    - Rows are plain dicts keyed by column name:
      short_code, target_url, total_clicks, created_at, last_clicked.
    - `insert_link` is an atomic insert-if-absent; a taken code raises
      ConflictError (no check-then-insert in callers).
    - `record_click` increments the counter and stamps last_clicked in one
      atomic step and returns the target URL, or None if the code is unknown.
    - Backend failures raise StoreError.

Testing & Coverage:
    Abstract declarations are annotated with `# pragma: no cover`.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    def open(self) -> None:
        """Acquire backend resources (pools, schema). No-op by default."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""

    @abstractmethod  # pragma: no cover
    def insert_link(self, short_code: str, target_url: str) -> Dict[str, Any]:
        """
        Insert a new link with zero clicks and return the stored row.

        Raises:
            ConflictError: If `short_code` already exists.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_link(self, short_code: str) -> Optional[Dict[str, Any]]:
        """Return the row for `short_code`, or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def record_click(self, short_code: str) -> Optional[str]:
        """
        Atomically add one click and set last_clicked to now.

        Returns:
            Optional[str]: The target URL, or None if the code does not exist.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_links(self) -> List[Dict[str, Any]]:
        """Return all rows, newest `created_at` first."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete_link(self, short_code: str) -> bool:
        """Remove the row. Returns False if the code did not exist."""
        raise NotImplementedError
