"""
Binding interface.

A binding fetches the raw value of a variable from one backing store. The
registry casts whatever a binding returns, so bindings stay focused on
lookup.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional

from envbind.env import Env


class Binding(ABC):
    """
    Abstract base class for binding sources.

    `init` runs expensive one-time setup (e.g. loading a file) and returns a
    context handed to `get_env`. When `context_key` returns a key, the
    registry memoizes the context under it so `init` runs once per key.
    """

    name: str = "binding"

    def init(self, env: Env) -> Any:
        """
        Prepare the context for `env`.

        Raises:
            BindingError: If the binding cannot be used for this variable
        """
        return None

    def context_key(self, env: Env) -> Optional[Hashable]:
        """Memoization key of the context for `env`; None disables memoization."""
        return None

    @abstractmethod
    def get_env(self, env: Env, context: Any) -> Any:
        """Return the raw value for `env`, or None when there is none."""
        pass
