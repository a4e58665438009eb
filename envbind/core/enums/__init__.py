"""
Core enums for envbind.

This module provides the enum classes used throughout envbind,
organized by domain.
"""

# Variable enums
from .variable import (
    VarType,
    BindingName
)

# Resolution enums
from .resolution import (
    ResolutionStatus,
    ResolutionSource
)

__all__ = [
    # Variable enums
    'VarType',
    'BindingName',

    # Resolution enums
    'ResolutionStatus',
    'ResolutionSource'
]
