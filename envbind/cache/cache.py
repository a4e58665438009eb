"""
Process-lifetime cache of resolved variable values.
"""

import threading
from typing import Any, Dict, List, Tuple

from envbind.env import Env
from envbind.logger import get_envbind_logger

_MISSING = object()


def gen_key(env: Env) -> Any:
    """Cache key of a descriptor."""
    return env.cache_key()


class EnvCache:
    """
    Sharded key/value store of resolved values.

    Reads take no lock: each shard is a plain dict and single lookups on it
    are atomic. Writers replace entries under the shard's lock, so puts and
    deletes on the same shard are serialized while readers keep going.
    A stored None is a hit, distinct from a missing entry.
    """

    def __init__(self, shards: int = 16):
        if shards < 1:
            raise ValueError("shards must be at least 1")
        self.logger = get_envbind_logger().bind(component="EnvCache")
        self._shards: List[Tuple[Dict[Any, Any], threading.Lock]] = [
            ({}, threading.Lock()) for _ in range(shards)
        ]

    def _shard(self, key: Any) -> Tuple[Dict[Any, Any], threading.Lock]:
        return self._shards[hash(key) % len(self._shards)]

    def get_env(self, env: Env) -> Tuple[bool, Any]:
        """
        Look up the cached value of `env`.

        Returns:
            (True, value) on a hit, (False, None) on a miss
        """
        key = gen_key(env)
        store, _ = self._shard(key)
        value = store.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def put_env(self, env: Env, value: Any) -> None:
        """Store `value` for `env`, replacing any previous value."""
        key = gen_key(env)
        store, lock = self._shard(key)
        with lock:
            store[key] = value
        self.logger.debug("Cached variable", os_env=env.gen_os_env())

    def delete_env(self, env: Env) -> bool:
        """Evict `env`; returns whether an entry was removed."""
        key = gen_key(env)
        store, lock = self._shard(key)
        with lock:
            removed = store.pop(key, _MISSING) is not _MISSING
        if removed:
            self.logger.debug("Evicted variable", os_env=env.gen_os_env())
        return removed

    def clear(self) -> None:
        """Remove every entry."""
        for store, lock in self._shards:
            with lock:
                store.clear()

    def __contains__(self, env: Env) -> bool:
        return self.get_env(env)[0]

    def __len__(self) -> int:
        return sum(len(store) for store, _ in self._shards)
