"""
Library-level settings.

These control envbind itself (active environment, logging) and are read
from the OS environment once, when the runtime is created.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Mapping, Optional


class Environment(Enum):
    """Environment types."""
    DEVELOPMENT = "development"
    TEST = "test"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


ENVIRONMENT_VAR = "ENVBIND_ENV"
LOG_LEVEL_VAR = "ENVBIND_LOG_LEVEL"
JSON_LOGS_VAR = "ENVBIND_JSON_LOGS"


@dataclass
class EnvbindSettings:
    """
    Settings for the envbind runtime.

    `environment` selects which `env_overrides` entry of a variable applies.
    It is a free-form name; the `Environment` enum lists the usual ones.
    """

    environment: str = Environment.DEVELOPMENT.value
    log_level: str = LogLevel.INFO.value
    json_logs: bool = False
    cache_shards: int = 16

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvbindSettings":
        """Build settings from `ENVBIND_*` OS variables."""
        environ = os.environ if environ is None else environ

        environment = environ.get(ENVIRONMENT_VAR, "").strip().lower()
        log_level = environ.get(LOG_LEVEL_VAR, "").strip().upper()
        if log_level not in LogLevel._value2member_map_:
            log_level = LogLevel.INFO.value
        json_logs = environ.get(JSON_LOGS_VAR, "").strip().lower() == "true"

        return cls(
            environment=environment or Environment.DEVELOPMENT.value,
            log_level=log_level,
            json_logs=json_logs,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            'environment': self.environment,
            'log_level': self.log_level,
            'json_logs': self.json_logs,
            'cache_shards': self.cache_shards,
        }


_active_settings: Optional[EnvbindSettings] = None


def get_settings() -> EnvbindSettings:
    """Return the process settings, reading them from the OS on first use."""
    global _active_settings
    if _active_settings is None:
        _active_settings = EnvbindSettings.from_environ()
    return _active_settings


def set_settings(settings: EnvbindSettings) -> None:
    """Replace the process settings."""
    global _active_settings
    _active_settings = settings


def get_environment() -> str:
    """Name of the active environment."""
    return get_settings().environment
