"""
Variable-related enums for envbind.
"""

from enum import Enum


class VarType(Enum):
    """Built-in cast targets for a variable."""
    STRING = "string"
    INTEGER = "integer"
    NEG_INTEGER = "neg_integer"
    NON_NEG_INTEGER = "non_neg_integer"
    POS_INTEGER = "pos_integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ATOM = "atom"
    UNSAFE_ATOM = "unsafe_atom"
    MODULE = "module"
    UNSAFE_MODULE = "unsafe_module"
    ANY = "any"

    @classmethod
    def from_value(cls, value):
        """Return the member for `value` (member or tag string), or None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                return None
        return None


class BindingName(Enum):
    """Identifiers of the built-in binding sources."""
    SYSTEM = "system"
    CONFIG = "config"
    FILE = "file"
