"""
Configuration layer of envbind.

- AppConfigRegistry: structured application configuration, per owner
- ConfigProvider: provider interface with in-memory and YAML file implementations
- Option validation for variable definitions
- EnvbindSettings: settings of the library itself
"""

from .provider import ConfigProvider, FileConfigProvider, RuntimeConfigProvider
from .registry import AppConfigRegistry
from .validator import (
    OptionsValidator, SchemaValidator, BusinessValidator,
    ValidationError, ValidationResult, validate_options, OPTION_NAMES
)
from .hashing import freeze, is_hashable
from .settings import (
    EnvbindSettings, Environment, LogLevel, get_settings, set_settings, get_environment
)

__all__ = [
    # Providers
    'ConfigProvider',
    'FileConfigProvider',
    'RuntimeConfigProvider',

    # Registry
    'AppConfigRegistry',

    # Validators
    'OptionsValidator',
    'SchemaValidator',
    'BusinessValidator',
    'ValidationError',
    'ValidationResult',
    'validate_options',
    'OPTION_NAMES',

    # Hashing
    'freeze',
    'is_hashable',

    # Settings
    'EnvbindSettings',
    'Environment',
    'LogLevel',
    'get_settings',
    'set_settings',
    'get_environment'
]
