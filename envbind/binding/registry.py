"""
Binding registry.

Maps binding identifiers to binding instances and runs the common fetch
pipeline: memoized `init`, `get_env`, then cast. Failures at any step are
logged and reported as "no value" so the resolver can move on to the next
binding.
"""

import threading
from typing import Any, Dict, Hashable, Optional, Tuple

from envbind.config.registry import AppConfigRegistry
from envbind.core.exceptions import BindingError, CastError, ConfigurationError
from envbind.env import Env
from envbind.logger import get_envbind_logger
from envbind.types import cast, type_name
from .app import AppConfigBinding
from .base import Binding
from .file import FileBinding
from .system import SystemBinding


class BindingRegistry:
    """
    Registry of binding sources.

    The built-in `system`, `config` and `file` bindings are registered on
    creation. Custom bindings are registered under a name, or a `Binding`
    subclass can be listed directly in a variable's `binding_order`, in which
    case a single instance per class is created on first use.
    """

    def __init__(self,
                 app_config: Optional[AppConfigRegistry] = None,
                 system: Optional[SystemBinding] = None):
        self.logger = get_envbind_logger().bind(component="BindingRegistry")
        self._lock = threading.RLock()
        self._bindings: Dict[Any, Binding] = {}
        self._contexts: Dict[Tuple[Any, Hashable], Any] = {}

        self.app_config = app_config if app_config is not None else AppConfigRegistry()
        self.register(SystemBinding.name, system if system is not None else SystemBinding())
        self.register(AppConfigBinding.name, AppConfigBinding(self.app_config))
        self.register(FileBinding.name, FileBinding())

    def register(self, binding_id: str, binding: Binding) -> Binding:
        """Register `binding` under `binding_id`, replacing any previous one."""
        if not isinstance(binding, Binding):
            raise ConfigurationError("binding", binding_id, "bindings must subclass Binding")
        with self._lock:
            self._bindings[binding_id] = binding
            self._drop_contexts(binding_id)
        self.logger.debug("Binding registered", binding=str(binding_id),
                          binding_type=type(binding).__name__)
        return binding

    def unregister(self, binding_id: Any) -> None:
        with self._lock:
            self._bindings.pop(binding_id, None)
            self._drop_contexts(binding_id)

    def get(self, binding_id: Any) -> Optional[Binding]:
        """Return the binding for an identifier, or None when unknown."""
        binding = self._bindings.get(binding_id)
        if binding is not None:
            return binding

        if isinstance(binding_id, type) and issubclass(binding_id, Binding):
            with self._lock:
                if binding_id not in self._bindings:
                    self._bindings[binding_id] = binding_id()
                return self._bindings[binding_id]
        return None

    def list_bindings(self) -> list:
        with self._lock:
            return list(self._bindings.keys())

    def clear_contexts(self) -> None:
        """Forget memoized binding contexts, forcing `init` to run again."""
        with self._lock:
            self._contexts.clear()

    def get_env(self, binding_id: Any, env: Env) -> Any:
        """
        Fetch and cast the value of `env` from one binding.

        Returns:
            The cast value, or None when the binding has no usable value
        """
        binding = self.get(binding_id)
        if binding is None:
            self.logger.warning("Unknown binding", binding=str(binding_id), os_env=env.gen_os_env())
            return None

        try:
            context = self._context(binding_id, binding, env)
            value = binding.get_env(env, context)
        except BindingError as e:
            self.logger.warning("Binding failed", binding=str(binding_id),
                                os_env=env.gen_os_env(), reason=str(e))
            return None
        except Exception as e:
            self.logger.warning("Binding failed", binding=str(binding_id),
                                os_env=env.gen_os_env(), reason=repr(e), exc_info=True)
            return None

        if value is None:
            return None

        try:
            return cast(value, env.type())
        except CastError as e:
            self.logger.warning("Cannot cast value", binding=str(binding_id),
                                os_env=env.gen_os_env(), type=type_name(env.type()),
                                value=repr(value), reason=str(e))
            return None

    def _context(self, binding_id: Any, binding: Binding, env: Env) -> Any:
        key = binding.context_key(env)
        if key is None:
            return binding.init(env)

        memo_key = (binding_id, key)
        if memo_key in self._contexts:
            return self._contexts[memo_key]

        with self._lock:
            if memo_key not in self._contexts:
                self._contexts[memo_key] = binding.init(env)
                self.logger.debug("Binding initialized", binding=str(binding_id), context_key=str(key))
            return self._contexts[memo_key]

    def _drop_contexts(self, binding_id: Any) -> None:
        for memo_key in [k for k in self._contexts if k[0] == binding_id]:
            del self._contexts[memo_key]
