import json
import threading

from structlog.testing import capture_logs

from envbind.binding import Binding, BindingRegistry, SystemBinding
from envbind.core.exceptions import BindingError


class CountingBinding(Binding):
    """Binding that counts `init` calls and serves a fixed mapping."""

    name = "counting"

    def __init__(self, values=None):
        self.values = values or {}
        self.init_calls = 0

    def context_key(self, env):
        return env.extra_options().get("source")

    def init(self, env):
        self.init_calls += 1
        return self.values

    def get_env(self, env, context):
        return context.get(env.gen_os_env())


class FailingBinding(Binding):

    def init(self, env):
        raise BindingError("failing", "no backing store")

    def get_env(self, env, context):
        return "never"


class TestBindingRegistry:
    """Dispatch, memoization and cast handling."""

    def test_builtin_bindings(self, bindings):
        assert {"system", "config", "file"} <= set(bindings.list_bindings())

    def test_fetch_casts_value(self, environ, bindings, make_env):
        environ["MYAPP_KEY"] = "42"
        assert bindings.get_env("system", make_env(type="integer")) == 42

    def test_cast_failure_is_no_value_and_logged(self, environ, bindings, make_env):
        environ["MYAPP_KEY"] = "42.5"

        with capture_logs() as logs:
            assert bindings.get_env("system", make_env(type="integer")) is None

        warnings = [log for log in logs if log["log_level"] == "warning"]
        assert warnings
        assert warnings[0]["event"] == "Cannot cast value"
        assert warnings[0]["os_env"] == "MYAPP_KEY"

    def test_unknown_binding_is_no_value(self, bindings, make_env):
        with capture_logs() as logs:
            assert bindings.get_env("nowhere", make_env()) is None
        assert any(log["event"] == "Unknown binding" for log in logs)

    def test_binding_error_is_no_value(self, bindings, make_env):
        bindings.register("failing", FailingBinding())

        with capture_logs() as logs:
            assert bindings.get_env("failing", make_env()) is None
        assert any(log["event"] == "Binding failed" for log in logs)

    def test_binding_class_in_order(self, bindings, make_env):
        assert bindings.get(CountingBinding) is bindings.get(CountingBinding)
        assert isinstance(bindings.get(CountingBinding), CountingBinding)

    def test_init_is_memoized_per_context_key(self, bindings, make_env):
        binding = bindings.register("counting", CountingBinding({"MYAPP_KEY": "value"}))

        env = make_env(source="a")
        assert bindings.get_env("counting", env) == "value"
        assert bindings.get_env("counting", env) == "value"
        assert bindings.get_env("counting", make_env(keys="other", source="a")) is None
        assert binding.init_calls == 1

        bindings.get_env("counting", make_env(source="b"))
        assert binding.init_calls == 2

    def test_clear_contexts(self, bindings, make_env):
        binding = bindings.register("counting", CountingBinding())
        env = make_env(source="a")

        bindings.get_env("counting", env)
        bindings.clear_contexts()
        bindings.get_env("counting", env)

        assert binding.init_calls == 2

    def test_concurrent_init_runs_once(self, bindings, make_env):
        binding = bindings.register("counting", CountingBinding({"MYAPP_KEY": "value"}))
        env = make_env(source="shared")
        results = []

        def fetch():
            results.append(bindings.get_env("counting", env))

        threads = [threading.Thread(target=fetch) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == ["value"] * 16
        assert binding.init_calls == 1

    def test_file_binding_loads_once(self, bindings, make_env, tmp_path):
        path = tmp_path / "values.json"
        path.write_text(json.dumps({"MYAPP_KEY": "first"}))
        env = make_env(config_path=str(path))

        assert bindings.get_env("file", env) == "first"

        path.write_text(json.dumps({"MYAPP_KEY": "second"}))
        assert bindings.get_env("file", env) == "first"

    def test_default_system_binding(self, make_env, monkeypatch):
        monkeypatch.setenv("MYAPP_REGISTRY_DEFAULT", "7")
        registry = BindingRegistry()

        assert isinstance(registry.get("system"), SystemBinding)
        assert registry.get_env("system", make_env(keys="registry_default", type="integer")) == 7
