"""
LinkRegistry module for shortlinks.

Responsibilities:
    - Allocate short codes (caller-supplied or randomly generated)
    - Validate target URLs and short-code format
    - Resolve codes for redirects while recording clicks
    - Read, list and delete links

Design notes:
    - Optimistic insert: a code is never checked before insertion. The store
      rejects taken codes with ConflictError, and generated codes that happen
      to collide are reported the same way (no silent retry).
    - Click accounting is delegated to a single atomic store operation.
    - Storage and the code generator are injected; the registry holds no
      mutable state of its own.
"""

import logging
from typing import Callable, List, Optional

from ..errors import NotFoundError, ValidationError
from ..schemas import Link
from ..storage.base import BaseStorage
from .codes import RandomStrategy, is_valid_code

log = logging.getLogger("shortlinks.registry")

CodeFactory = Callable[[], str]

# Paths served by fixed routes that would shadow a link's redirect.
RESERVED_CODES = frozenset({"healthz", "static"})


class LinkRegistry:
    """
    Coordinates code allocation, click accounting and lookups over a store.
    """

    def __init__(self, storage: BaseStorage, code_factory: Optional[CodeFactory] = None):
        """
        Args:
            storage (BaseStorage): Backend storage instance.
            code_factory (Optional[CodeFactory]): Zero-argument callable
                returning a fresh code. Defaults to RandomStrategy().
        """
        self.storage = storage
        self.code_factory = code_factory or RandomStrategy()

    # ---------------------------------------------------------------------
    # Validation Helpers
    # ---------------------------------------------------------------------
    def _validate_target(self, target_url: Optional[str]) -> str:
        if not isinstance(target_url, str) or not target_url.strip():
            raise ValidationError("Target URL is required.")
        return target_url

    def _resolve_code(self, short_code: Optional[str]) -> str:
        """
        Return the code to insert: the trimmed supplied code, or a generated
        one when the code is absent or the empty string.

        Raises:
            ValidationError: If a supplied code is not 6-8 alphanumerics
                after trimming, or names a fixed route.
        """
        if not short_code:
            return self.code_factory()
        code = short_code.strip()
        if not is_valid_code(code):
            raise ValidationError("Short code must be 6 to 8 alphanumeric characters.")
        if code in RESERVED_CODES:
            raise ValidationError(f'Short code "{code}" is reserved.')
        return code

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def create_link(self, target_url: Optional[str], short_code: Optional[str] = None) -> Link:
        """
        Create a link for `target_url`, optionally under a caller-chosen code.

        Returns:
            Link: The stored record (zero clicks, never clicked).

        Raises:
            ValidationError: Missing target URL or malformed short code.
            ConflictError: The code is already in use.
            StoreError: Datastore failure.
        """
        target_url = self._validate_target(target_url)
        code = self._resolve_code(short_code)
        row = self.storage.insert_link(code, target_url)
        log.info("Created link %s -> %s", code, target_url)
        return Link.from_row(row)

    def redirect(self, code: str) -> str:
        """
        Resolve `code` to its target URL and record one click.

        Raises:
            NotFoundError: Unknown code.
        """
        target_url = self.storage.record_click(code)
        if target_url is None:
            raise NotFoundError()
        log.debug("Redirect %s -> %s", code, target_url)
        return target_url

    def get_link(self, code: str) -> Link:
        """Return the link for `code` without side effects."""
        row = self.storage.get_link(code)
        if row is None:
            raise NotFoundError()
        return Link.from_row(row)

    def list_links(self) -> List[Link]:
        """All links, newest first."""
        return [Link.from_row(row) for row in self.storage.list_links()]

    def delete_link(self, code: str) -> bool:
        """
        Permanently remove the link for `code`; the code becomes free again.

        Raises:
            NotFoundError: Unknown or already deleted code.
        """
        if not self.storage.delete_link(code):
            raise NotFoundError("Link not found or already deleted.")
        log.info("Deleted link %s", code)
        return True
