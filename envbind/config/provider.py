"""
Application configuration providers.

A provider holds the configuration of one owner (application) as a mapping
of top level keys to values, usually nested mappings.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from pathlib import Path
import copy
import threading

import yaml

from envbind.logger import get_envbind_logger


class ConfigProvider(ABC):
    """
    Abstract base class for configuration providers.

    Defines the interface that all configuration providers must implement.
    """

    def __init__(self, owner: str):
        self.owner = owner
        self.logger = get_envbind_logger().bind(component=f"ConfigProvider_{owner}")
        self._lock = threading.RLock()

    @abstractmethod
    def get_config(self) -> Dict[str, Any]:
        """Get current configuration."""
        pass

    @abstractmethod
    def get_value(self, key: Any, default: Any = None) -> Any:
        """Get a top level value."""
        pass

    @abstractmethod
    def update_config(self, updates: Dict[str, Any]) -> bool:
        """Update configuration with new values."""
        pass

    @abstractmethod
    def delete_value(self, key: Any) -> bool:
        """Delete a top level value."""
        pass

    @abstractmethod
    def reset_to_defaults(self) -> bool:
        """Reset configuration to defaults."""
        pass


class RuntimeConfigProvider(ConfigProvider):
    """
    Runtime configuration provider that keeps config in memory.
    """

    def __init__(self, owner: str, initial_config: Optional[Dict[str, Any]] = None):
        super().__init__(owner)
        self._config = dict(initial_config or {})

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration from memory."""
        with self._lock:
            return copy.deepcopy(self._config)

    def get_value(self, key: Any, default: Any = None) -> Any:
        with self._lock:
            return self._config.get(key, default)

    def update_config(self, updates: Dict[str, Any]) -> bool:
        """Update configuration in memory."""
        if not isinstance(updates, dict):
            self.logger.error("Rejected runtime config update", update_type=type(updates).__name__)
            return False

        with self._lock:
            new_config = self._config.copy()
            new_config.update(updates)
            self._config = new_config
            return True

    def delete_value(self, key: Any) -> bool:
        with self._lock:
            if key not in self._config:
                return False
            new_config = self._config.copy()
            del new_config[key]
            self._config = new_config
            return True

    def reset_to_defaults(self) -> bool:
        """Reset to empty configuration."""
        with self._lock:
            self._config = {}
            return True


class FileConfigProvider(ConfigProvider):
    """
    File-based configuration provider that reads from a YAML file.

    The file is re-read whenever its modification time changes. Runtime
    updates are layered on top of the file contents and are not written
    back to disk.
    """

    def __init__(self, owner: str, config_file: str):
        super().__init__(owner)
        self.config_file = Path(config_file)
        self._config_cache: Optional[Dict[str, Any]] = None
        self._last_modified: Optional[float] = None
        self._overrides: Dict[str, Any] = {}
        self._deleted: set = set()

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration from file plus runtime overrides."""
        with self._lock:
            self._refresh_cache()
            config = copy.deepcopy(self._config_cache) if self._config_cache else {}
            for key in self._deleted:
                config.pop(key, None)
            config.update(copy.deepcopy(self._overrides))
            return config

    def get_value(self, key: Any, default: Any = None) -> Any:
        with self._lock:
            if key in self._overrides:
                return self._overrides[key]
            if key in self._deleted:
                return default
            self._refresh_cache()
            if not self._config_cache:
                return default
            return self._config_cache.get(key, default)

    def update_config(self, updates: Dict[str, Any]) -> bool:
        """Layer runtime values over the file contents."""
        if not isinstance(updates, dict):
            self.logger.error("Rejected file config update", update_type=type(updates).__name__)
            return False

        with self._lock:
            self._overrides.update(updates)
            self._deleted.difference_update(updates)
            return True

    def delete_value(self, key: Any) -> bool:
        with self._lock:
            self._overrides.pop(key, None)
            self._deleted.add(key)
            return True

    def reset_to_defaults(self) -> bool:
        """Drop runtime overrides and force a re-read of the file."""
        with self._lock:
            self._overrides.clear()
            self._deleted.clear()
            self._config_cache = None
            self._last_modified = None
        return True

    def _refresh_cache(self):
        """Refresh configuration cache if file has changed."""
        if not self.config_file.exists():
            return

        try:
            current_mtime = self.config_file.stat().st_mtime

            if self._last_modified is None or current_mtime > self._last_modified:
                with open(self.config_file, 'r') as f:
                    loaded = yaml.safe_load(f) or {}
                if not isinstance(loaded, dict):
                    self.logger.error("Config file is not a mapping",
                                      path=str(self.config_file),
                                      content_type=type(loaded).__name__)
                    loaded = {}
                self._config_cache = loaded
                self._last_modified = current_mtime
                self.logger.debug("Config file loaded", path=str(self.config_file))

        except (OSError, yaml.YAMLError) as e:
            self.logger.error("Failed to refresh config cache",
                              path=str(self.config_file), error=str(e))
