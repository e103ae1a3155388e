"""Tests for the template function namespace."""

import re

import pytest

from blaster.generators.namespace import FunctionNamespace, get_default_namespace

EXPECTED_FUNCTIONS = {
    "rand_int",
    "rand_float",
    "rand_string",
    "rand_blake2b256",
    "rand_datum_hash",
    "rand_address",
    "rand_credential",
    "rand_asset",
    "rand_output_ref",
    "rand_metadata_tag",
}


def test_default_namespace_exposes_core_functions(namespace):
    assert EXPECTED_FUNCTIONS <= set(namespace.names())


def test_bound_functions_take_template_arguments_only(namespace):
    assert 3 <= namespace.get("rand_int")(3, 4) < 4
    assert len(namespace.get("rand_string")(6)) == 6
    assert re.fullmatch(r"[0-9a-f]{64}", namespace.get("rand_datum_hash")())
    assert re.fullmatch(r"[0-9a-f]{64}", namespace.get("rand_blake2b256")())


def test_register_and_lookup():
    ns = FunctionNamespace()
    ns.register("constant", lambda: "x")
    assert "constant" in ns
    assert ns.get("constant")() == "x"
    assert ns.get("missing") is None
    assert ns.count() == 1


def test_register_rejects_bad_entries():
    ns = FunctionNamespace()
    with pytest.raises(ValueError):
        ns.register("not valid", lambda: "x")
    with pytest.raises(ValueError):
        ns.register("value", "not callable")


def test_as_globals_is_a_copy(namespace):
    table = namespace.as_globals()
    table.pop("rand_int")
    assert "rand_int" in namespace


def test_global_namespace_is_shared():
    assert get_default_namespace() is get_default_namespace()
