"""
Application configuration binding.
"""

from collections.abc import Mapping
from typing import Any, Sequence

from envbind.config.registry import AppConfigRegistry
from envbind.core.enums import BindingName
from envbind.env import Env
from .base import Binding


class AppConfigBinding(Binding):
    """
    Reads variables from the structured application configuration.

    Without a namespace the lookup is `owner -> keys[0] -> keys[1] ...`.
    With a namespace it is `owner -> namespace -> keys[0] -> ...`. Every
    intermediate value must be a mapping, otherwise there is no value.
    """

    name = BindingName.CONFIG.value

    def __init__(self, app_config: AppConfigRegistry):
        self.app_config = app_config

    def get_env(self, env: Env, context: Any) -> Any:
        if env.namespace is None:
            first, rest = env.keys[0], env.keys[1:]
        else:
            first, rest = env.namespace, env.keys

        value = self.app_config.get_env(env.owner, first)
        return lookup(value, rest)


def lookup(value: Any, keys: Sequence[Any]) -> Any:
    """Walk `keys` into nested mappings; None when the path breaks."""
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value
