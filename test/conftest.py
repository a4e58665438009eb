"""
Shared pytest configuration and fixtures for the envbind tests.
"""

import uuid

import pytest

from envbind.binding import BindingRegistry, SystemBinding
from envbind.cache import EnvCache
from envbind.config import AppConfigRegistry
from envbind.env import Env
from envbind.resolver import Resolver


@pytest.fixture
def environ():
    """OS environment stand-in read by the system binding."""
    return {}


@pytest.fixture
def app_config():
    """Empty application configuration."""
    return AppConfigRegistry()


@pytest.fixture
def bindings(app_config, environ):
    """Binding registry isolated from the real OS environment."""
    return BindingRegistry(app_config, SystemBinding(environ))


@pytest.fixture
def cache():
    return EnvCache(shards=4)


@pytest.fixture
def resolver(bindings, cache):
    """Resolver with its own bindings and cache."""
    return Resolver(bindings, cache)


@pytest.fixture
def unique_app():
    """Owner name that no other test uses."""
    return f"app_{uuid.uuid4().hex[:12]}"


@pytest.fixture
def make_env():
    """Build descriptors pinned to the `test` environment."""
    def _make(namespace=None, owner="myapp", keys="key", **options):
        return Env.new(namespace, owner, keys, environment="test", **options)
    return _make
