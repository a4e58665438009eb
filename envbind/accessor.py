"""
Registration and accessor layer.

`define` turns a variable declaration into a `Variable`, a small object
that builds descriptors on demand and forwards to a resolver::

    hostname = define("hostname", "myapp", "hostname", default="localhost")
    hostname()                  # -> "localhost"
    hostname.get("Test")        # -> Resolution for the "Test" namespace
    hostname.put("example.org")
    hostname.reload()

`Settings` groups variables under attribute names.
"""

from typing import Any, Dict, Iterator, Optional, Sequence, Union

from envbind.env import Env
from envbind.resolver import Resolution, Resolver


class Variable:
    """A declared variable bound to a resolver."""

    def __init__(self,
                 name: str,
                 owner: str,
                 keys: Union[str, Sequence[str]],
                 resolver: Optional[Resolver] = None,
                 **options: Any):
        self.name = name
        self.owner = owner
        self.keys = keys
        self.options = options
        self._resolver = resolver
        # Fail at declaration time on bad options
        self.env()

    @property
    def resolver(self) -> Resolver:
        if self._resolver is None:
            from envbind.runtime import get_resolver
            return get_resolver()
        return self._resolver

    def env(self, namespace: Optional[str] = None) -> Env:
        """Descriptor of this variable in `namespace`."""
        return Env.new(namespace, self.owner, self.keys, **self.options)

    def get(self, namespace: Optional[str] = None) -> Resolution:
        return self.resolver.get_env(self.env(namespace))

    def get_or_raise(self, namespace: Optional[str] = None) -> Any:
        return self.resolver.get_env_or_raise(self.env(namespace))

    def reload(self, namespace: Optional[str] = None) -> Resolution:
        return self.resolver.reload_env(self.env(namespace))

    def put(self, value: Any, namespace: Optional[str] = None) -> Resolution:
        return self.resolver.put_env(self.env(namespace), value)

    def delete(self, namespace: Optional[str] = None) -> bool:
        return self.resolver.delete_env(self.env(namespace))

    def __call__(self, namespace: Optional[str] = None) -> Any:
        return self.get_or_raise(namespace)

    def __repr__(self):
        return f"Variable(name={self.name!r}, owner={self.owner!r}, keys={self.keys!r})"


def define(name: str,
           owner: str,
           keys: Union[str, Sequence[str]],
           resolver: Optional[Resolver] = None,
           **options: Any) -> Variable:
    """Declare a variable."""
    return Variable(name, owner, keys, resolver=resolver, **options)


class Settings:
    """
    A named group of variables.

    Variables declared with `app_env` (or `system_env` for variables without
    application configuration) are reachable as attributes.
    """

    def __init__(self, resolver: Optional[Resolver] = None):
        self._resolver = resolver
        self._variables: Dict[str, Variable] = {}

    def app_env(self, name: str, owner: str, keys: Union[str, Sequence[str]], **options: Any) -> Variable:
        if name in self._variables:
            raise ValueError(f"Variable {name!r} is already defined")
        if name.startswith("_") or hasattr(type(self), name):
            raise ValueError(f"Invalid variable name: {name!r}")
        variable = define(name, owner, keys, resolver=self._resolver, **options)
        self._variables[name] = variable
        return variable

    def system_env(self, name: str, owner: str, **options: Any) -> Variable:
        """Declare a variable read from the OS environment only."""
        options.setdefault('binding_order', ['system'])
        return self.app_env(name, owner, name, **options)

    def __getattr__(self, name: str) -> Variable:
        variables = self.__dict__.get('_variables', {})
        if name in variables:
            return variables[name]
        raise AttributeError(name)

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._variables.values()))

    def __len__(self) -> int:
        return len(self._variables)

    def validate(self, namespace: Optional[str] = None) -> Dict[str, str]:
        """
        Resolve every variable and collect failures.

        Returns:
            Mapping of variable name to error message; empty when all resolve
        """
        errors = {}
        for name, variable in self._variables.items():
            resolution = variable.get(namespace)
            if not resolution.success:
                errors[name] = resolution.error_message
        return errors
