"""
Resolution-specific exceptions for envbind.
"""

from .base import EnvbindError


class CastError(EnvbindError):
    """Raised when a raw value cannot be cast to the declared type."""

    def __init__(self, value, type_, reason: str = None):
        self.value = value
        self.type = type_
        self.reason = reason
        message = f"Cannot cast {value!r} to {type_}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class BindingError(EnvbindError):
    """Raised by a binding that cannot initialize or fetch a value."""

    def __init__(self, binding: str, reason: str = None):
        self.binding = binding
        self.reason = reason
        message = f"Binding '{binding}' failed"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MissingVariableError(EnvbindError):
    """Raised when a required variable resolves to nothing."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CacheDisabledError(EnvbindError):
    """Raised when putting a value for a variable that is not cached."""

    def __init__(self, message: str = "Cache disabled for this variable"):
        self.message = message
        super().__init__(message)


class ReloadError(EnvbindError):
    """Raised when a reload cannot produce a fresh value."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
