"""
Type casting for variable values.

Every cast target is identified by a tag: a `VarType` member (or its string
value), a custom tag registered with `register_type`, or a `CustomType`
subclass used directly. `cast` returns the typed value or raises `CastError`;
callers decide whether a failure is recoverable.
"""

import importlib
import math
import re
import sys
import threading
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any, Callable, Dict, Union

from envbind.core.enums import VarType
from envbind.core.exceptions import CastError, ConfigurationError
from .symbols import symbols

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?")
_MODULE_PATH_RE = re.compile(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*")

Caster = Callable[[Any], Any]


class CustomType(ABC):
    """
    Base class for user-defined cast targets.

    Subclasses implement `cast` and either get used directly as the `type`
    option of a variable or get registered under a tag, e.g.::

        class IntegerList(CustomType):
            def cast(self, value):
                if isinstance(value, str):
                    return [int(v.strip()) for v in value.split(",")]
                raise CastError(value, "integer_list")
    """

    @abstractmethod
    def cast(self, value: Any) -> Any:
        """Return the cast value or raise CastError/ValueError/TypeError."""
        pass


TypeSpec = Union[VarType, str, type]


class TypeRegistry:
    """Registry of custom casters keyed by tag."""

    def __init__(self):
        self._lock = threading.Lock()
        self._casters: Dict[str, Caster] = {}

    def register(self, tag: str, caster: Union[Caster, CustomType, type]) -> None:
        if VarType.from_value(tag) is not None:
            raise ConfigurationError("type", tag, "tag shadows a built-in type")
        if isinstance(caster, type) and issubclass(caster, CustomType):
            caster = caster()
        if isinstance(caster, CustomType):
            caster = caster.cast
        if not callable(caster):
            raise ConfigurationError("type", tag, "caster must be callable")
        with self._lock:
            self._casters[tag] = caster

    def unregister(self, tag: str) -> None:
        with self._lock:
            self._casters.pop(tag, None)

    def get(self, tag: str) -> Caster | None:
        return self._casters.get(tag)

    def __contains__(self, tag: str) -> bool:
        return tag in self._casters


type_registry = TypeRegistry()


def register_type(tag: str, caster: Union[Caster, CustomType, type]) -> None:
    """Register a custom caster under `tag`."""
    type_registry.register(tag, caster)


def is_known_type(type_: Any) -> bool:
    """Check whether `type_` names a cast target."""
    if VarType.from_value(type_) is not None:
        return True
    if isinstance(type_, type) and issubclass(type_, CustomType):
        return True
    return isinstance(type_, str) and type_ in type_registry


def infer_type(default: Any) -> VarType:
    """Infer the cast target from the shape of a default value."""
    if default is None or isinstance(default, str):
        return VarType.STRING
    # bool before int: bool is an int subclass
    if isinstance(default, bool):
        return VarType.BOOLEAN
    if isinstance(default, int):
        return VarType.INTEGER
    if isinstance(default, float):
        return VarType.FLOAT
    return VarType.ANY


def type_name(type_: TypeSpec) -> str:
    """Human readable name of a cast target, for logs and errors."""
    if isinstance(type_, VarType):
        return type_.value
    if isinstance(type_, type):
        return type_.__name__
    return str(type_)


def cast(value: Any, type_: TypeSpec) -> Any:
    """
    Cast `value` to `type_`.

    Args:
        value: Raw value from a binding, usually a string
        type_: Cast target tag

    Returns:
        The typed value. `None` is returned unchanged.

    Raises:
        CastError: If the value cannot be cast
    """
    if value is None:
        return None

    builtin = VarType.from_value(type_)
    if builtin is not None:
        return _BUILTIN_CASTERS[builtin](value)

    custom_class = isinstance(type_, type) and issubclass(type_, CustomType)
    caster = None if custom_class else type_registry.get(type_)
    if not custom_class and caster is None:
        raise CastError(value, type_name(type_), "unknown type")

    try:
        if custom_class:
            return type_().cast(value)
        return caster(value)
    except CastError:
        raise
    except Exception as e:
        raise CastError(value, type_name(type_), repr(e)) from e


def cast_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CastError(value, "string", "not valid UTF-8") from e
    if isinstance(value, (bool, int, float, PurePath)):
        return str(value)
    raise CastError(value, "string")


def _parse_integer(value: Any, type_: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        try:
            return int(value)
        except ValueError as e:
            raise CastError(value, type_, str(e)) from e
    raise CastError(value, type_)


def cast_integer(value: Any) -> int:
    return _parse_integer(value, "integer")


def cast_neg_integer(value: Any) -> int:
    number = _parse_integer(value, "neg_integer")
    if number >= 0:
        raise CastError(value, "neg_integer", "must be negative")
    return number


def cast_non_neg_integer(value: Any) -> int:
    number = _parse_integer(value, "non_neg_integer")
    if number < 0:
        raise CastError(value, "non_neg_integer", "must not be negative")
    return number


def cast_pos_integer(value: Any) -> int:
    number = _parse_integer(value, "pos_integer")
    if number <= 0:
        raise CastError(value, "pos_integer", "must be positive")
    return number


def cast_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, str) and _FLOAT_RE.fullmatch(value):
        number = float(value)
        if not math.isfinite(number):
            raise CastError(value, "float", "out of range")
        return number
    raise CastError(value, "float")


def cast_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise CastError(value, "boolean")


def cast_atom(value: Any) -> str:
    if isinstance(value, str):
        known = symbols.lookup(value)
        if known is not None:
            return known
        raise CastError(value, "atom", "unknown symbol")
    raise CastError(value, "atom")


def cast_unsafe_atom(value: Any) -> str:
    if isinstance(value, str) and value.isidentifier():
        return symbols.mint(value)
    raise CastError(value, "unsafe_atom")


def _resolve_loaded(path: str) -> Any:
    """Resolve a dotted path against already imported modules only."""
    parts = path.split(".")
    for i in range(len(parts), 0, -1):
        module = sys.modules.get(".".join(parts[:i]))
        if module is None:
            continue
        target = module
        for attr in parts[i:]:
            if not hasattr(target, attr):
                return None
            target = getattr(target, attr)
        return target
    return None


def cast_module(value: Any) -> Any:
    if not isinstance(value, str):
        if hasattr(value, "__name__"):
            return value
        raise CastError(value, "module")
    if not _MODULE_PATH_RE.fullmatch(value):
        raise CastError(value, "module", "invalid dotted path")
    target = _resolve_loaded(value)
    if target is None:
        raise CastError(value, "module", "not loaded")
    return target


def cast_unsafe_module(value: Any) -> Any:
    if not isinstance(value, str):
        if hasattr(value, "__name__"):
            return value
        raise CastError(value, "unsafe_module")
    if not _MODULE_PATH_RE.fullmatch(value):
        raise CastError(value, "unsafe_module", "invalid dotted path")
    target = _resolve_loaded(value)
    if target is not None:
        return target
    try:
        return importlib.import_module(value)
    except ImportError:
        return value


def cast_any(value: Any) -> Any:
    return value


_BUILTIN_CASTERS: Dict[VarType, Caster] = {
    VarType.STRING: cast_string,
    VarType.INTEGER: cast_integer,
    VarType.NEG_INTEGER: cast_neg_integer,
    VarType.NON_NEG_INTEGER: cast_non_neg_integer,
    VarType.POS_INTEGER: cast_pos_integer,
    VarType.FLOAT: cast_float,
    VarType.BOOLEAN: cast_boolean,
    VarType.ATOM: cast_atom,
    VarType.UNSAFE_ATOM: cast_unsafe_atom,
    VarType.MODULE: cast_module,
    VarType.UNSAFE_MODULE: cast_unsafe_module,
    VarType.ANY: cast_any,
}
