import sys
from pathlib import Path

import pytest

from envbind.core.enums import VarType
from envbind.core.exceptions import CastError, ConfigurationError
from envbind.types import (
    cast, infer_type, is_known_type, register_type, register_symbols,
    CustomType, TypeRegistry, SymbolTable
)
from envbind.types.caster import type_registry


class IntegerList(CustomType):
    """Casts "1, 2, 3" to [1, 2, 3]."""

    def cast(self, value):
        if isinstance(value, str):
            return [int(v.strip()) for v in value.split(",")]
        if isinstance(value, list) and all(isinstance(v, int) for v in value):
            return value
        raise CastError(value, "integer_list")


class TestBuiltinCasts:
    """Casting to the built-in types."""

    def test_string_passthrough(self):
        assert cast("foo", VarType.STRING) == "foo"

    def test_string_from_scalars(self):
        assert cast(42, "string") == "42"
        assert cast(b"bytes", "string") == "bytes"
        assert cast(Path("/tmp/x"), "string") == str(Path("/tmp/x"))

    def test_string_rejects_containers(self):
        with pytest.raises(CastError):
            cast({"foo": 42}, "string")

    def test_integer(self):
        assert cast("42", "integer") == 42
        assert cast("-7", "integer") == -7
        assert cast(42, "integer") == 42

    @pytest.mark.parametrize("raw", ["42.5", "42abc", " 42", "4_2", "", "0x10"])
    def test_integer_requires_whole_string(self, raw):
        with pytest.raises(CastError):
            cast(raw, "integer")

    def test_integer_rejects_floats_and_bools(self):
        with pytest.raises(CastError):
            cast(42.0, "integer")
        with pytest.raises(CastError):
            cast(True, "integer")

    def test_integer_beyond_conversion_limit(self):
        with pytest.raises(CastError):
            cast("1" * 5000, "integer")
        with pytest.raises(CastError):
            cast("1" * 5000, "pos_integer")

    def test_integer_subtypes(self):
        assert cast("-1", "neg_integer") == -1
        assert cast("0", "non_neg_integer") == 0
        assert cast("3", "pos_integer") == 3

        with pytest.raises(CastError):
            cast("0", "neg_integer")
        with pytest.raises(CastError):
            cast("-1", "non_neg_integer")
        with pytest.raises(CastError):
            cast("0", "pos_integer")

    def test_float(self):
        assert cast("42.5", "float") == 42.5
        assert cast("42", "float") == 42.0
        assert cast("1e3", "float") == 1000.0
        assert cast(1.5, "float") == 1.5

    @pytest.mark.parametrize("raw", ["42.5x", "nan", "inf", "1.", ""])
    def test_float_requires_whole_string(self, raw):
        with pytest.raises(CastError):
            cast(raw, "float")

    @pytest.mark.parametrize("raw", ["1e400", "-1e400", "9" * 400])
    def test_float_rejects_overflow(self, raw):
        with pytest.raises(CastError):
            cast(raw, "float")

    def test_boolean(self):
        assert cast("true", "boolean") is True
        assert cast("TRUE", "boolean") is True
        assert cast("False", "boolean") is False
        assert cast(False, "boolean") is False

    @pytest.mark.parametrize("raw", ["yes", "1", "t", "", 1])
    def test_boolean_rejects_other_values(self, raw):
        with pytest.raises(CastError):
            cast(raw, "boolean")

    def test_any_is_passthrough(self):
        value = {"a": [1, 2]}
        assert cast(value, "any") is value

    def test_none_is_never_cast(self):
        assert cast(None, "integer") is None

    def test_type_tags_are_case_insensitive(self):
        assert cast("42", "Integer") == 42


class TestAtomCasts:
    """Casting to symbols."""

    def test_atom_accepts_known_symbols(self):
        register_symbols("known_symbol")
        assert cast("known_symbol", "atom") == "known_symbol"

    def test_atom_rejects_unknown_symbols(self):
        with pytest.raises(CastError):
            cast("never_registered_symbol_xyz", "atom")

    def test_unsafe_atom_mints_symbols(self):
        assert cast("minted_symbol_abc", "unsafe_atom") == "minted_symbol_abc"
        assert cast("minted_symbol_abc", "atom") == "minted_symbol_abc"

    def test_unsafe_atom_requires_identifier(self):
        with pytest.raises(CastError):
            cast("not an identifier", "unsafe_atom")

    def test_symbol_table(self):
        table = SymbolTable(["a"])
        assert "a" in table
        assert table.lookup("b") is None
        assert table.mint("b") == "b"
        assert len(table) == 2
        with pytest.raises(ValueError):
            table.register("1abc")


class TestModuleCasts:
    """Casting dotted paths to loaded code."""

    def test_module_resolves_loaded_module(self):
        assert cast("os.path", "module") is sys.modules["os.path"]

    def test_module_resolves_attributes(self):
        assert cast("pathlib.Path", "module") is Path

    def test_module_rejects_unloaded_paths(self):
        with pytest.raises(CastError):
            cast("surely_not_a_loaded_module.sub", "module")

    def test_module_rejects_invalid_paths(self):
        with pytest.raises(CastError):
            cast("os..path", "module")

    def test_unsafe_module_imports(self):
        module = cast("json", "unsafe_module")
        assert module.__name__ == "json"

    def test_unsafe_module_keeps_unknown_paths(self):
        assert cast("not_installed.anywhere", "unsafe_module") == "not_installed.anywhere"


class TestCustomCasts:
    """User-defined casters."""

    def test_custom_type_class(self):
        assert cast("1, 2,    3", IntegerList) == [1, 2, 3]

    def test_custom_type_failure(self):
        with pytest.raises(CastError):
            cast(42, IntegerList)

    def test_value_errors_become_cast_errors(self):
        with pytest.raises(CastError):
            cast("1, two", IntegerList)

    def test_any_caster_exception_becomes_cast_error(self):
        register_type("lookup", lambda value: {"a": 1}[value])
        try:
            assert cast("a", "lookup") == 1
            with pytest.raises(CastError) as info:
                cast("zzz", "lookup")
            assert isinstance(info.value.__cause__, KeyError)
        finally:
            type_registry.unregister("lookup")

    def test_registered_tag(self):
        register_type("csv", lambda value: value.split(","))
        try:
            assert cast("a,b", "csv") == ["a", "b"]
            assert is_known_type("csv")
        finally:
            type_registry.unregister("csv")

    def test_unknown_tag(self):
        with pytest.raises(CastError):
            cast("value", "no_such_type")

    def test_registry_rejects_builtin_tags(self):
        registry = TypeRegistry()
        with pytest.raises(ConfigurationError):
            registry.register("integer", int)

    def test_registry_accepts_custom_type_classes(self):
        registry = TypeRegistry()
        registry.register("integer_list", IntegerList)
        assert registry.get("integer_list")("4,5") == [4, 5]


class TestInferType:
    """Type inference from defaults."""

    @pytest.mark.parametrize("default, expected", [
        (None, VarType.STRING),
        ("foo", VarType.STRING),
        (42, VarType.INTEGER),
        (42.0, VarType.FLOAT),
        (True, VarType.BOOLEAN),
        ([1, 2], VarType.ANY),
    ])
    def test_infer(self, default, expected):
        assert infer_type(default) is expected
