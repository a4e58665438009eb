"""
Binding sources.

- Binding: interface implemented by every source
- SystemBinding: OS environment variables
- AppConfigBinding: structured application configuration
- FileBinding: JSON/YAML files
- BindingRegistry: identifier lookup plus the fetch-and-cast pipeline
"""

from .base import Binding
from .system import SystemBinding
from .app import AppConfigBinding, lookup
from .file import FileBinding, load_document, CONFIG_PATH_OPTION
from .registry import BindingRegistry

__all__ = [
    'Binding',
    'SystemBinding',
    'AppConfigBinding',
    'FileBinding',
    'BindingRegistry',
    'lookup',
    'load_document',
    'CONFIG_PATH_OPTION'
]
