"""
Resolution-related enums for envbind.
"""

from enum import Enum


class ResolutionStatus(Enum):
    """Outcome of a resolver operation."""
    RESOLVED = "resolved"
    CACHED = "cached"
    STORED = "stored"
    UNDEFINED = "undefined"
    CACHE_DISABLED = "cache_disabled"
    RELOAD_FAILED = "reload_failed"


class ResolutionSource(Enum):
    """Where a resolved value came from, besides a binding."""
    CACHE = "cache"
    DEFAULT = "default"
    EXPLICIT = "explicit"
    NONE = "none"
