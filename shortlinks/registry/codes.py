"""
Short-code generation and validation.

- CODE_PATTERN: accepted codes are 6-8 characters of [A-Za-z0-9].
- RandomStrategy: random code over the 62-character alphabet, drawn
  independently on every call. No uniqueness check happens here; the store's
  unique key decides.
"""

import random
import re
import string
from dataclasses import dataclass
from typing import Optional

from ..config import settings

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")
MIN_LENGTH = 6
MAX_LENGTH = 8


def is_valid_code(code: str) -> bool:
    """True if `code` is 6-8 alphanumeric characters."""
    return bool(CODE_PATTERN.fullmatch(code))


def _safe_len(length: Optional[int]) -> int:
    """Resolve length from arg or config, clamped to the valid code range."""
    L = int(length) if length is not None else int(settings.CODE_LENGTH)
    return max(MIN_LENGTH, min(MAX_LENGTH, L))


@dataclass(frozen=True)
class RandomStrategy:
    """Random alphanumeric codes of a fixed length (7 unless configured)."""
    length: Optional[int] = None

    def generate(self) -> str:
        rng = random.SystemRandom()
        return "".join(rng.choice(ALPHABET) for _ in range(_safe_len(self.length)))

    __call__ = generate


def generate_code(length: Optional[int] = None) -> str:
    return RandomStrategy(length).generate()
