"""
Process-wide runtime.

The default application configuration, binding registry, cache and
resolver are created once, at import, and shared by every accessor that
does not bring its own resolver.
"""

from envbind.binding import BindingRegistry
from envbind.cache import EnvCache
from envbind.config import AppConfigRegistry, get_settings
from envbind.logger import init_logger
from envbind.resolver import Resolver

settings = get_settings()
logger = init_logger(settings)

app_config = AppConfigRegistry()
bindings = BindingRegistry(app_config)
cache = EnvCache(settings.cache_shards)
resolver = Resolver(bindings, cache)


def get_resolver() -> Resolver:
    """Return the default resolver."""
    return resolver
