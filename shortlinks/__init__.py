"""
shortlinks package initializer.
"""

from . import registry
from . import storage

__all__ = ["registry", "storage"]
