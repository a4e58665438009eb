import threading

import pytest

from envbind.cache import EnvCache, gen_key


class TestEnvCache:
    """Sharded value store."""

    def setup_method(self):
        self.cache = EnvCache(shards=4)

    def test_miss(self, make_env):
        assert self.cache.get_env(make_env()) == (False, None)

    def test_put_and_get(self, make_env):
        env = make_env()
        self.cache.put_env(env, 42)

        assert self.cache.get_env(env) == (True, 42)
        assert env in self.cache
        assert len(self.cache) == 1

    def test_stored_none_is_a_hit(self, make_env):
        env = make_env()
        self.cache.put_env(env, None)

        assert self.cache.get_env(env) == (True, None)

    def test_put_replaces(self, make_env):
        env = make_env()
        self.cache.put_env(env, 1)
        self.cache.put_env(env, 2)

        assert self.cache.get_env(env) == (True, 2)
        assert len(self.cache) == 1

    def test_equal_descriptors_share_an_entry(self, make_env):
        self.cache.put_env(make_env(keys=["a", "b"], default=[1, 2]), "value")
        assert self.cache.get_env(make_env(keys=["a", "b"], default=[1, 2])) == (True, "value")

    def test_different_options_are_different_entries(self, make_env):
        self.cache.put_env(make_env(default=1), "int")
        self.cache.put_env(make_env(default=True), "bool")

        assert self.cache.get_env(make_env(default=1)) == (True, "int")
        assert self.cache.get_env(make_env(default=True)) == (True, "bool")

    def test_namespaces_are_different_entries(self, make_env):
        self.cache.put_env(make_env(), "global")

        assert self.cache.get_env(make_env("Test")) == (False, None)

    def test_explicit_cache_key(self, make_env):
        self.cache.put_env(make_env(keys="a", cache_key="shared"), "value")

        assert self.cache.get_env(make_env(keys="b", cache_key="shared")) == (True, "value")
        assert gen_key(make_env(keys="a", cache_key="shared")) == ("__explicit__", "shared")

    def test_delete(self, make_env):
        env = make_env()
        self.cache.put_env(env, 1)

        assert self.cache.delete_env(env) is True
        assert self.cache.delete_env(env) is False
        assert self.cache.get_env(env) == (False, None)

    def test_clear(self, make_env):
        for key in ("a", "b", "c"):
            self.cache.put_env(make_env(keys=key), key)
        self.cache.clear()

        assert len(self.cache) == 0

    def test_invalid_shard_count(self):
        with pytest.raises(ValueError):
            EnvCache(shards=0)

    def test_concurrent_writers(self, make_env):
        envs = [make_env(keys=f"key{i}") for i in range(50)]

        def write(offset):
            for i, env in enumerate(envs):
                self.cache.put_env(env, i + offset)
                self.cache.get_env(env)

        threads = [threading.Thread(target=write, args=(n * 1000,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(self.cache) == 50
        for i, env in enumerate(envs):
            found, value = self.cache.get_env(env)
            assert found
            assert value % 1000 == i
