"""
Application configuration registry.

Holds the structured configuration of every owner (application), the
equivalent of an application environment: `owner -> key -> value`, where
values are usually nested mappings walked by the config binding.
"""

import threading
from typing import Dict, Any, Optional
from pathlib import Path

from .provider import ConfigProvider, FileConfigProvider, RuntimeConfigProvider
from envbind.logger import get_envbind_logger


class AppConfigRegistry:
    """
    Central registry of per-owner configuration providers.

    Owners without an explicit provider get a `RuntimeConfigProvider`, or a
    `FileConfigProvider` for `<config_dir>/<owner>.yaml` when a config
    directory is set and the file exists.
    """

    def __init__(self, config_dir: Optional[str] = None):
        self.config_dir = Path(config_dir) if config_dir else None
        self.logger = get_envbind_logger().bind(component="AppConfigRegistry")
        self._lock = threading.RLock()
        self._providers: Dict[str, ConfigProvider] = {}

    def register_owner(self, owner: str, provider: Optional[ConfigProvider] = None) -> ConfigProvider:
        """
        Register an owner with its configuration provider.

        Args:
            owner: Owner (application) name
            provider: Optional custom provider, defaults to the directory file
                provider or an in-memory one

        Returns:
            The registered configuration provider
        """
        with self._lock:
            if provider is None:
                provider = self._default_provider(owner)

            self._providers[owner] = provider
            self.logger.debug("Owner registered", owner=owner, provider_type=type(provider).__name__)

            return provider

    def load_file(self, owner: str, path: str) -> ConfigProvider:
        """Back an owner's configuration with a YAML file."""
        return self.register_owner(owner, FileConfigProvider(owner, path))

    def get_provider(self, owner: str) -> ConfigProvider:
        """Get the provider for an owner, registering a default one if needed."""
        provider = self._providers.get(owner)
        if provider is not None:
            return provider

        with self._lock:
            if owner not in self._providers:
                return self.register_owner(owner)
            return self._providers[owner]

    def has_owner(self, owner: str) -> bool:
        return owner in self._providers

    def get_env(self, owner: str, key: Any, default: Any = None) -> Any:
        """Get the value stored under `key` for `owner`."""
        provider = self._providers.get(owner)
        if provider is None:
            if self.config_dir is None:
                return default
            provider = self.get_provider(owner)
        return provider.get_value(key, default)

    def put_env(self, owner: str, key: Any, value: Any) -> bool:
        """Set the value stored under `key` for `owner`."""
        return self.get_provider(owner).update_config({key: value})

    def delete_env(self, owner: str, key: Any) -> bool:
        """Delete the value stored under `key` for `owner`."""
        provider = self._providers.get(owner)
        if provider is None:
            return False
        return provider.delete_value(key)

    def get_config(self, owner: str) -> Dict[str, Any]:
        """Get the whole configuration of an owner."""
        return self.get_provider(owner).get_config()

    def list_owners(self) -> list[str]:
        """List all registered owners."""
        with self._lock:
            return list(self._providers.keys())

    def reset_all(self):
        """Reset all owners and clear the registry."""
        with self._lock:
            for provider in self._providers.values():
                provider.reset_to_defaults()

            self._providers.clear()

            self.logger.info("Registry reset completed")

    def _default_provider(self, owner: str) -> ConfigProvider:
        if self.config_dir is not None:
            config_file = self.config_dir / f"{owner}.yaml"
            if config_file.exists():
                return FileConfigProvider(owner, str(config_file))
        return RuntimeConfigProvider(owner)
