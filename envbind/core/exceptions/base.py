"""
Base exception classes for envbind.
"""


class EnvbindError(Exception):
    """Base exception for all envbind errors."""
    pass


class ConfigurationError(EnvbindError):
    """Raised when a variable definition or its options are invalid."""

    def __init__(self, config_key: str = None, config_value=None, reason: str = None):
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason
        message = "Configuration error"
        if config_key:
            message += f" for '{config_key}'"
        if config_value is not None:
            message += f" with value {config_value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)