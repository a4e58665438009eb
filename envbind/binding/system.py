"""
OS environment binding.
"""

import os
from typing import Any, Mapping, Optional

from envbind.core.enums import BindingName
from envbind.env import Env
from .base import Binding


class SystemBinding(Binding):
    """
    Reads variables from the OS environment.

    The variable name comes from `Env.os_env()`. Unset and blank values mean
    no value.
    """

    name = BindingName.SYSTEM.value

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def get_env(self, env: Env, context: Any) -> Any:
        name = env.os_env()
        if not name:
            return None

        value = self.environ.get(name)
        if value is None or not value.strip():
            return None
        return value
