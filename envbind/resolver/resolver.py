"""
Variable resolution.

The resolver walks a fixed sequence of states for every lookup:

    cache -> bindings -> namespace fallback -> default -> required check

and writes successful results back to the cache for cached variables.
Cast and binding failures never escape: they are logged by the binding
registry and count as "no value". The only hard error of a lookup is a
required variable that resolved to nothing.
"""

from typing import Any, Optional, Tuple

from envbind.binding import BindingRegistry
from envbind.cache import EnvCache
from envbind.core.enums import ResolutionSource, ResolutionStatus
from envbind.env import Env
from envbind.logger import get_envbind_logger
from .result_objects import Resolution

CACHE_DISABLED_MESSAGE = "Cache disabled for this variable"


class Resolver:
    """
    Resolves variables against a binding registry, backed by a cache.
    """

    def __init__(self,
                 bindings: Optional[BindingRegistry] = None,
                 cache: Optional[EnvCache] = None):
        self.bindings = bindings if bindings is not None else BindingRegistry()
        self.cache = cache if cache is not None else EnvCache()
        self.logger = get_envbind_logger().bind(component="Resolver")

    # Public API

    def get_env(self, env: Env) -> Resolution:
        """Resolve the value of `env`, using the cache when enabled."""
        if not env.cached():
            return self.resolve(env)

        found, value = self.cache.get_env(env)
        if found:
            return Resolution.ok(value, ResolutionStatus.CACHED, ResolutionSource.CACHE.value)

        resolution = self.resolve(env)
        if resolution.success:
            self.cache.put_env(env, resolution.value)
        return resolution

    def get_env_or_raise(self, env: Env) -> Any:
        """
        Resolve the value of `env`.

        Raises:
            MissingVariableError: If the variable is required and undefined
        """
        return self.get_env(env).unwrap()

    def put_env(self, env: Env, value: Any) -> Resolution:
        """Store `value` as the cached value of `env`, bypassing the bindings."""
        if not env.cached():
            return Resolution.error(ResolutionStatus.CACHE_DISABLED, CACHE_DISABLED_MESSAGE)

        self.cache.put_env(env, value)
        return Resolution.ok(value, ResolutionStatus.STORED, ResolutionSource.EXPLICIT.value)

    def reload_env(self, env: Env) -> Resolution:
        """
        Resolve `env` again, ignoring the cache.

        A fresh value replaces the cached one. On failure the cached value
        is kept and the error is returned.
        """
        resolution = self.resolve(env)
        if not resolution.success:
            self.logger.warning("Reload failed, keeping last value",
                                os_env=env.gen_os_env(), reason=resolution.error_message)
            return Resolution.error(
                ResolutionStatus.RELOAD_FAILED,
                f"Cannot reload the variable, keeping last value: {resolution.error_message}"
            )

        if env.cached():
            self.cache.put_env(env, resolution.value)
        self.logger.debug("Variable reloaded", os_env=env.gen_os_env(), source=resolution.source)
        return resolution

    def delete_env(self, env: Env) -> bool:
        """Evict the cached value of `env`."""
        return self.cache.delete_env(env)

    # States

    def resolve(self, env: Env) -> Resolution:
        """Resolve `env` without touching the cache."""
        found, value, source = self.walk_bindings(env)

        if not found and env.namespace is not None:
            found, value, source = self.walk_bindings(env.without_namespace())

        if found:
            return Resolution.ok(value, ResolutionStatus.RESOLVED, source)

        default = env.default()
        if default is not None:
            return Resolution.ok(default, ResolutionStatus.RESOLVED, ResolutionSource.DEFAULT.value)

        if env.required():
            return Resolution.error(ResolutionStatus.UNDEFINED, env.undefined_message())

        return Resolution.ok(None, ResolutionStatus.RESOLVED, ResolutionSource.NONE.value)

    def walk_bindings(self, env: Env) -> Tuple[bool, Any, Optional[str]]:
        """
        Try each binding in order; the first one with a value wins.

        Returns:
            (found, value, binding id)
        """
        for binding_id in env.binding_order():
            value = self.bindings.get_env(binding_id, env)
            if value is not None:
                return True, value, _source_name(binding_id)
        return False, None, None


def _source_name(binding_id: Any) -> str:
    if isinstance(binding_id, type):
        return binding_id.__name__
    return str(binding_id)
