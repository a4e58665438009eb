"""
Structural identity of variable options.

Option values may contain lists and dicts. `freeze` turns them into nested
tuples so that two descriptors declared with the same options compare and
hash the same, no matter where or when they were built.
"""

from typing import Any, Mapping


def freeze(value: Any) -> Any:
    """
    Return a hashable, order-stable rendition of `value`.

    - mappings become tuples of `(key, value)` pairs sorted by `repr(key)`
    - lists and tuples become tuples
    - sets become sorted tuples

    Raises:
        TypeError: If a leaf value is not hashable
    """
    if isinstance(value, Mapping):
        items = ((freeze(k), freeze(v)) for k, v in value.items())
        return ("__mapping__",) + tuple(sorted(items, key=lambda kv: repr(kv[0])))
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return ("__set__",) + tuple(sorted((freeze(v) for v in value), key=repr))
    # True == 1 == 1.0 in Python; keep them apart
    if isinstance(value, (bool, int, float)):
        return (type(value).__name__, value)
    hash(value)
    return value


def is_hashable(value: Any) -> bool:
    """Check whether `value` can take part in a cache key."""
    try:
        freeze(value)
    except TypeError:
        return False
    return True
