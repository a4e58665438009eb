"""
Validation of variable options.

Options form a closed set of settings. They are checked once, when a
descriptor is built, so resolution never has to deal with malformed ones.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional, Callable

from envbind.logger import get_envbind_logger
from envbind.types import is_known_type
from .hashing import is_hashable


OPTION_NAMES = frozenset({
    'default', 'type', 'os_env', 'binding_order', 'binding_skip',
    'required', 'cached', 'namespace', 'cache_key', 'env_overrides',
})

OVERRIDABLE_OPTIONS = frozenset({'default', 'required'})


class ValidationError(Exception):
    """Exception raised when option validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(message)


class ValidationResult:
    """Result of option validation."""

    def __init__(self, is_valid: bool = True, errors: Optional[List[ValidationError]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: ValidationError):
        """Add a validation error."""
        self.errors.append(error)
        self.is_valid = False

    def merge(self, other: "ValidationResult"):
        for error in other.errors:
            self.add_error(error)

    def __bool__(self):
        return self.is_valid


class OptionsValidator(ABC):
    """Abstract base class for option validators."""

    def __init__(self, name: str):
        self.name = name
        self.logger = get_envbind_logger().bind(component=f"OptionsValidator_{name}")

    @abstractmethod
    def validate(self, options: Dict[str, Any]) -> ValidationResult:
        """Validate option data."""
        pass


class SchemaValidator(OptionsValidator):
    """Checks that options are present and of the expected Python type."""

    def __init__(self, name: str, schema: Dict[str, Any]):
        super().__init__(name)
        self.schema = schema

    def validate(self, options: Dict[str, Any]) -> ValidationResult:
        """Validate options against schema."""
        result = ValidationResult()

        for key, expected_type in self.schema.items():
            if key not in options:
                result.add_error(ValidationError(f"Missing required option: {key}", field=key))
                continue

            value = options[key]
            if not isinstance(value, expected_type):
                names = (expected_type if isinstance(expected_type, tuple) else (expected_type,))
                expected = " or ".join(t.__name__ for t in names)
                result.add_error(ValidationError(
                    f"Option {key} must be of type {expected}, got {type(value).__name__}",
                    field=key, value=value
                ))

        return result


class BusinessValidator(OptionsValidator):
    """Runs a list of rule functions over the options."""

    def __init__(self, name: str, validation_rules: List[Callable[[Dict[str, Any]], Any]]):
        super().__init__(name)
        self.validation_rules = validation_rules

    def validate(self, options: Dict[str, Any]) -> ValidationResult:
        """Validate options using the rules."""
        result = ValidationResult()

        for rule in self.validation_rules:
            rule_result = rule(options)
            if isinstance(rule_result, ValidationResult):
                result.merge(rule_result)
            elif rule_result is False:
                result.add_error(ValidationError(f"Rule {rule.__name__} failed"))

        return result


def check_type(options: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    type_ = options.get('type')
    if type_ is not None and not is_known_type(type_):
        result.add_error(ValidationError(f"Unknown type: {type_!r}", field='type', value=type_))
    return result


def check_os_env(options: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    os_env = options.get('os_env')
    if os_env is not None and (not isinstance(os_env, str) or not os_env):
        result.add_error(ValidationError("Option os_env must be a non-empty string",
                                         field='os_env', value=os_env))
    return result


def check_bindings(options: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    for key in ('binding_order', 'binding_skip'):
        for binding in options.get(key, ()):
            if not isinstance(binding, (str, type)):
                result.add_error(ValidationError(
                    f"Binding identifiers in {key} must be names or binding classes",
                    field=key, value=binding
                ))
    return result


def check_env_overrides(options: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    overrides = options.get('env_overrides')
    if overrides is None:
        return result
    if not isinstance(overrides, dict):
        result.add_error(ValidationError("Option env_overrides must be a dict",
                                         field='env_overrides', value=overrides))
        return result
    for environment, values in overrides.items():
        if not isinstance(values, dict):
            result.add_error(ValidationError(
                f"Overrides for environment {environment!r} must be a dict",
                field='env_overrides', value=values
            ))
            continue
        unknown = set(values) - OVERRIDABLE_OPTIONS
        if unknown:
            result.add_error(ValidationError(
                f"Options {sorted(unknown)} cannot be overridden per environment",
                field='env_overrides', value=values
            ))
    return result


def check_hashable(options: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    for key, value in options.items():
        if not is_hashable(value):
            result.add_error(ValidationError(
                f"Option {key} holds a value that cannot be part of a cache key",
                field=key, value=value
            ))
    return result


OPTIONS_SCHEMA = {
    'required': bool,
    'cached': bool,
    'binding_order': (list, tuple),
    'binding_skip': (list, tuple),
}

schema_validator = SchemaValidator("schema", OPTIONS_SCHEMA)
rules_validator = BusinessValidator("rules", [
    check_type, check_os_env, check_bindings, check_env_overrides, check_hashable,
])


def validate_options(options: Dict[str, Any]) -> ValidationResult:
    """Validate a full option set (defaults already merged)."""
    result = schema_validator.validate(options)
    result.merge(rules_validator.validate(options))
    return result
