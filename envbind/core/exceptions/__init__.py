"""
Core exceptions for envbind.

This module provides all exception classes used throughout envbind,
organized by domain and with a clear inheritance hierarchy.
"""

# Base exceptions
from .base import (
    EnvbindError,
    ConfigurationError
)

# Resolution exceptions
from .resolution import (
    CastError,
    BindingError,
    MissingVariableError,
    CacheDisabledError,
    ReloadError
)

__all__ = [
    # Base exceptions
    'EnvbindError',
    'ConfigurationError',

    # Resolution exceptions
    'CastError',
    'BindingError',
    'MissingVariableError',
    'CacheDisabledError',
    'ReloadError'
]
