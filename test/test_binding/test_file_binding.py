from pathlib import Path

import pytest

from envbind.binding import FileBinding, load_document
from envbind.core.exceptions import BindingError

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


class TestFileBinding:
    """Reading JSON and YAML documents."""

    def test_json_literal_key(self, make_env):
        binding = FileBinding()
        env = make_env(os_env="MY_JSON_VALUE", config_path=str(FIXTURES / "config.json"))

        context = binding.init(env)
        assert binding.get_env(env, context) == 21

    def test_json_nested_path(self, make_env):
        binding = FileBinding()
        env = make_env(keys=["nested", "port"], config_path=str(FIXTURES / "config.json"))

        context = binding.init(env)
        assert binding.get_env(env, context) == "8080"

    def test_yaml_namespaced_path(self, make_env):
        binding = FileBinding()
        env = make_env("Prod", keys="hostname", config_path=str(FIXTURES / "config.yaml"))

        context = binding.init(env)
        assert binding.get_env(env, context) == "yaml.prod.host"

    def test_literal_key_ignores_binding_order(self, make_env):
        binding = FileBinding()
        env = make_env(os_env="MY_YAML_VALUE", binding_order=["file"],
                       config_path=str(FIXTURES / "config.yaml"))

        assert binding.get_env(env, binding.init(env)) == "84"

    def test_missing_path_option(self, make_env):
        with pytest.raises(BindingError):
            FileBinding().init(make_env())

    def test_context_key_is_the_path(self, make_env):
        binding = FileBinding()
        env = make_env(config_path=str(FIXTURES / "config.json"))

        assert binding.context_key(env) == str((FIXTURES / "config.json").resolve())
        assert binding.context_key(make_env()) is None


class TestLoadDocument:
    """Parsing files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(BindingError):
            load_document(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(BindingError):
            load_document(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("a = 1")
        with pytest.raises(BindingError):
            load_document(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(BindingError):
            load_document(path)
