"""
Type casting for envbind variables.

- cast: convert a raw value to a declared type
- infer_type: derive the type from a default value
- CustomType / register_type: plug in user-defined casters
- register_symbols: declare symbols for the safe `atom` type
"""

from .caster import (
    cast, infer_type, is_known_type, type_name, register_type,
    CustomType, TypeRegistry, type_registry
)
from .symbols import SymbolTable, symbols, register_symbols

__all__ = [
    'cast',
    'infer_type',
    'is_known_type',
    'type_name',
    'register_type',
    'CustomType',
    'TypeRegistry',
    'type_registry',
    'SymbolTable',
    'symbols',
    'register_symbols'
]
