"""
Cache of resolved variable values.
"""

from .cache import EnvCache, gen_key

__all__ = [
    'EnvCache',
    'gen_key'
]
