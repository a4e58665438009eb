"""
envbind: layered resolution of configuration variables.

A variable is looked up in the OS environment, then in the structured
application configuration (and any custom binding), then falls back to its
default. Results are cast to the declared type and cached per variable.
"""

from .env import Env, EnvOptions
from .accessor import Variable, Settings, define
from .binding import Binding, BindingRegistry, SystemBinding, AppConfigBinding, FileBinding
from .cache import EnvCache
from .config import AppConfigRegistry, EnvbindSettings
from .core.enums import VarType, BindingName, ResolutionStatus
from .core.exceptions import (
    EnvbindError, ConfigurationError, CastError, BindingError,
    MissingVariableError, CacheDisabledError, ReloadError
)
from .resolver import Resolver, Resolution
from .types import CustomType, register_type, register_symbols, cast
from . import runtime


def get_env(env: Env) -> Resolution:
    """Resolve `env` with the default resolver."""
    return runtime.resolver.get_env(env)


def get_env_or_raise(env: Env):
    """Resolve `env` with the default resolver, raising when undefined."""
    return runtime.resolver.get_env_or_raise(env)


def put_env(env: Env, value) -> Resolution:
    """Store a value for `env` in the default cache."""
    return runtime.resolver.put_env(env, value)


def reload_env(env: Env) -> Resolution:
    """Reload `env` with the default resolver."""
    return runtime.resolver.reload_env(env)


__all__ = [
    # Descriptors and accessors
    'Env',
    'EnvOptions',
    'Variable',
    'Settings',
    'define',

    # Bindings
    'Binding',
    'BindingRegistry',
    'SystemBinding',
    'AppConfigBinding',
    'FileBinding',

    # Cache and resolver
    'EnvCache',
    'Resolver',
    'Resolution',

    # Configuration
    'AppConfigRegistry',
    'EnvbindSettings',

    # Types
    'VarType',
    'BindingName',
    'ResolutionStatus',
    'CustomType',
    'register_type',
    'register_symbols',
    'cast',

    # Exceptions
    'EnvbindError',
    'ConfigurationError',
    'CastError',
    'BindingError',
    'MissingVariableError',
    'CacheDisabledError',
    'ReloadError',

    # Default runtime
    'runtime',
    'get_env',
    'get_env_or_raise',
    'put_env',
    'reload_env'
]
