"""
Variable resolution: the resolver state machine and its result objects.
"""

from .resolver import Resolver, CACHE_DISABLED_MESSAGE
from .result_objects import Resolution

__all__ = [
    'Resolver',
    'Resolution',
    'CACHE_DISABLED_MESSAGE'
]
