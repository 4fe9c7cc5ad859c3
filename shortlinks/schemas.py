"""
Pydantic schemas for link records and request payloads.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class Link(BaseModel):
    """A stored short link with its usage counters."""
    short_code: str
    target_url: str
    total_clicks: int = 0
    created_at: datetime
    last_clicked: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Link":
        """Build a Link from a storage row (dict keyed by column name)."""
        return cls(
            short_code=row["short_code"],
            target_url=row["target_url"],
            total_clicks=row["total_clicks"],
            created_at=row["created_at"],
            last_clicked=row.get("last_clicked"),
        )


class LinkCreate(BaseModel):
    """
    Request payload for creating a link.

    Both fields are optional at the schema level so that a missing target URL
    is reported by the registry with its own message.
    """
    target_url: Optional[str] = None
    short_code: Optional[str] = None
