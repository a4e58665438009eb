"""
Variable descriptor.

An `Env` describes one configurable value: the owning application, the key
path into its configuration, an optional namespace and the options that
drive resolution. Descriptors are cheap, immutable and compared
structurally, so the same declaration built twice maps to the same cache
entry.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from envbind.config.hashing import freeze
from envbind.config.settings import get_environment
from envbind.config.validator import OPTION_NAMES, validate_options
from envbind.core.enums import BindingName, VarType
from envbind.core.exceptions import ConfigurationError
from envbind.types import infer_type

DEFAULT_BINDING_ORDER = (BindingName.SYSTEM.value, BindingName.CONFIG.value)

BindingId = Union[str, type]


def _binding_id(binding: Any) -> Any:
    if isinstance(binding, Enum):
        return binding.value
    return binding


@dataclass(frozen=True, eq=False)
class EnvOptions:
    """Resolution options of a variable."""
    default: Any = None
    type: Any = None
    os_env: Optional[str] = None
    binding_order: Tuple[BindingId, ...] = DEFAULT_BINDING_ORDER
    binding_skip: Tuple[BindingId, ...] = ()
    required: bool = False
    cached: bool = True
    namespace: Optional[str] = None
    cache_key: Any = None
    env_overrides: Optional[Mapping[str, Mapping[str, Any]]] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def identity(self) -> tuple:
        """Frozen tuple of every option, used for equality and hashing."""
        return freeze((
            self.default, self.type, self.os_env, self.binding_order,
            self.binding_skip, self.required, self.cached, self.namespace,
            self.cache_key, self.env_overrides, self.extra,
        ))

    def __eq__(self, other):
        if not isinstance(other, EnvOptions):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self):
        return hash(self.identity())


@dataclass(frozen=True, eq=False)
class Env:
    """
    Descriptor of one configuration variable.

    Attributes:
        namespace: Optional partition (e.g. an environment or profile name);
            dotted names such as "My.Custom.Namespace" are allowed
        owner: Application owning the variable
        keys: Non-empty key path into the owner's configuration
        options: Resolution options
        environment: Active environment when the descriptor was built; it
            selects the `env_overrides` entry
    """
    namespace: Optional[str]
    owner: str
    keys: Tuple[str, ...]
    options: EnvOptions = field(default_factory=EnvOptions)
    environment: str = ""

    @classmethod
    def new(cls,
            namespace: Optional[str],
            owner: str,
            keys: Union[str, Sequence[str]],
            /,
            environment: Optional[str] = None,
            **options: Any) -> "Env":
        """
        Build a descriptor.

        A single key becomes a one-element key path. The positional
        `namespace` wins over the `namespace` option unless it is None.
        Unrecognized options are kept in `extra` for custom bindings.

        Raises:
            ConfigurationError: If the key path is empty or an option is invalid
        """
        if isinstance(keys, str):
            keys = (keys,)
        keys = tuple(keys)
        if not keys:
            raise ConfigurationError("keys", keys, "at least one key is required")
        for key in keys:
            if not isinstance(key, str) or not key:
                raise ConfigurationError("keys", key, "keys must be non-empty strings")
        if not isinstance(owner, str) or not owner:
            raise ConfigurationError("owner", owner, "owner must be a non-empty string")

        if namespace is None:
            namespace = options.get('namespace')
        if namespace is not None and (not isinstance(namespace, str) or not namespace):
            raise ConfigurationError("namespace", namespace, "namespace must be a non-empty string")

        merged = cls.defaults(options)
        for key in ('binding_order', 'binding_skip'):
            if isinstance(merged[key], (list, tuple)):
                merged[key] = tuple(_binding_id(b) for b in merged[key])
        if isinstance(merged.get('type'), VarType):
            merged['type'] = merged['type'].value

        result = validate_options(merged)
        if not result.is_valid:
            error = result.errors[0]
            raise ConfigurationError(error.field, error.value, error.message)

        extra = {k: v for k, v in merged.items() if k not in OPTION_NAMES}
        known = {k: v for k, v in merged.items() if k in OPTION_NAMES}

        return cls(
            namespace=namespace,
            owner=owner,
            keys=keys,
            options=EnvOptions(extra=extra, **known),
            environment=environment if environment is not None else get_environment(),
        )

    @staticmethod
    def defaults(options: Dict[str, Any]) -> Dict[str, Any]:
        """Merge the default options into `options`."""
        merged = dict(options)
        merged.setdefault('required', False)
        merged.setdefault('cached', True)
        merged.setdefault('binding_order', list(DEFAULT_BINDING_ORDER))
        merged.setdefault('binding_skip', [])
        return merged

    # Identity

    def identity(self) -> tuple:
        return (self.namespace, self.owner, self.keys, self.options.identity(), self.environment)

    def __eq__(self, other):
        if not isinstance(other, Env):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self):
        return hash(self.identity())

    def cache_key(self) -> Any:
        """Key of this variable in the cache."""
        if self.options.cache_key is not None:
            return ("__explicit__", freeze(self.options.cache_key))
        return self.identity()

    def without_namespace(self) -> "Env":
        """Copy of this descriptor in the default namespace."""
        return replace(self, namespace=None)

    # Derived accessors

    def binding_order(self) -> Tuple[BindingId, ...]:
        """Bindings to walk, in order: `binding_order` minus `binding_skip`."""
        skip = set(self.options.binding_skip)
        order = []
        for binding in self.options.binding_order:
            if binding not in skip and binding not in order:
                order.append(binding)
        return tuple(order)

    def os_env(self) -> str:
        """
        Name of the OS environment variable for this descriptor.

        `os_env` is returned verbatim when set; otherwise the name is
        `[NAMESPACE_]OWNER_KEY1_KEY2...` in upper case. Empty when the system
        binding is not part of the binding order.
        """
        if BindingName.SYSTEM.value not in self.binding_order():
            return ""
        return self.gen_os_env()

    def gen_os_env(self) -> str:
        """Variable name regardless of the binding order."""
        if self.options.os_env is not None:
            return self.options.os_env
        return f"{self.gen_namespace()}{self.gen_owner()}_{self.gen_keys()}"

    def gen_namespace(self) -> str:
        if self.namespace is None:
            return ""
        segments = (s.upper() for s in self.namespace.split("."))
        return "_".join(segments) + "_"

    def gen_owner(self) -> str:
        return self.owner.upper()

    def gen_keys(self) -> str:
        return "_".join(key.upper() for key in self.keys)

    def type(self) -> Any:
        """Cast target: the `type` option, else inferred from the default."""
        if self.options.type is not None:
            return self.options.type
        return infer_type(self.options.default)

    def _override(self, name: str, value: Any) -> Any:
        overrides = self.options.env_overrides
        if not overrides:
            return value
        current = overrides.get(self.environment)
        if current and name in current:
            return current[name]
        return value

    def default(self) -> Any:
        return self._override('default', self.options.default)

    def required(self) -> bool:
        return self._override('required', self.options.required)

    def cached(self) -> bool:
        return self.options.cached

    def extra_options(self) -> Mapping[str, Any]:
        return self.options.extra

    def render_name(self) -> str:
        """Human readable name for diagnostics."""
        noun = "Variable" if len(self.keys) == 1 else "Variables"
        name = f"{noun} {', '.join(self.keys)} in app {self.owner}"
        if self.namespace is not None:
            name += f" (namespace {self.namespace})"
        return name

    def undefined_message(self) -> str:
        verb = "is" if len(self.keys) == 1 else "are"
        return f"{self.render_name()} {verb} undefined"

    def __repr__(self):
        return (f"Env(namespace={self.namespace!r}, owner={self.owner!r}, "
                f"keys={self.keys!r}, os_env={self.os_env()!r})")
