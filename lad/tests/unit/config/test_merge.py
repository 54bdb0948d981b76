"""
Unit tests for the configuration merge engine.
"""

import pytest

from lad.config.merge import apply_overlay, deep_merge
from lad.core.exceptions import ConfigurationError


@pytest.fixture
def base():
    return {
        "app_name": "Lad",
        "views": {"root": "/views", "locals": {"pretty": True, "cache": True, "filters": {}}},
        "session_keys": ["a", "b"],
        "rate_limit": {"max": 1000, "id": len},
    }


def test_merge_with_empty_overlay_is_identity(base):
    assert deep_merge(base, {}) == base


@pytest.mark.parametrize("overlays", [None, {}, {"production": {"app_name": "Other"}}])
def test_absent_overlay_returns_base(base, overlays):
    assert apply_overlay(base, overlays, "test") == base


def test_overlay_set_to_none_is_ignored(base):
    assert apply_overlay(base, {"test": None}, "test") == base


def test_merge_is_idempotent(base):
    overlay = {"views": {"locals": {"cache": False}}, "session_keys": ["c"]}
    once = deep_merge(base, overlay)
    assert deep_merge(once, overlay) == once


def test_nested_mappings_are_merged(base):
    result = deep_merge(base, {"views": {"locals": {"cache": False}}})

    assert result["views"]["locals"] == {"pretty": True, "cache": False, "filters": {}}
    assert result["views"]["root"] == "/views"


def test_lists_are_replaced_not_concatenated(base):
    result = deep_merge(base, {"session_keys": ["c"]})
    assert result["session_keys"] == ["c"]


def test_constructed_objects_are_replaced(base):
    result = deep_merge(base, {"rate_limit": {"id": str}})
    assert result["rate_limit"]["id"] is str
    assert result["rate_limit"]["max"] == 1000


def test_scalar_replaces_mapping_and_mapping_replaces_scalar(base):
    result = deep_merge(base, {"views": "disabled", "app_name": {"short": "L"}})
    assert result["views"] == "disabled"
    assert result["app_name"] == {"short": "L"}


def test_new_keys_are_added(base):
    assert deep_merge(base, {"extra": {"x": 1}})["extra"] == {"x": 1}


def test_inputs_are_not_mutated(base):
    overlay = {"views": {"locals": {"cache": False}}, "session_keys": ["c"]}
    result = deep_merge(base, overlay)

    result["views"]["locals"]["filters"]["translate"] = print
    result["session_keys"].append("d")

    assert base["views"]["locals"] == {"pretty": True, "cache": True, "filters": {}}
    assert base["session_keys"] == ["a", "b"]
    assert overlay == {"views": {"locals": {"cache": False}}, "session_keys": ["c"]}


def test_key_order_does_not_change_result():
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    first = deep_merge(base, {"b": {"d": 4, "c": 5}, "a": 6})
    second = deep_merge(base, {"a": 6, "b": {"c": 5, "d": 4}})
    assert first == second


def test_apply_overlay_selects_environment(base):
    overlays = {
        "production": {"views": {"locals": {"pretty": False}}},
        "development": {"views": {"locals": {"cache": False}}},
    }
    result = apply_overlay(base, overlays, "production")

    assert result["views"]["locals"]["pretty"] is False
    assert result["views"]["locals"]["cache"] is True


@pytest.mark.parametrize("overlay", ["production", ["a"], 42])
def test_malformed_overlay_is_fatal(base, overlay):
    with pytest.raises(ConfigurationError) as excinfo:
        apply_overlay(base, {"production": overlay}, "production")
    assert excinfo.value.context["environment"] == "production"
