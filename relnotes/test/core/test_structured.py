"""Tests for relnotes.core.structured helpers."""

from relnotes.core.structured import (
    as_str_dict,
    get_bool,
    get_float,
    get_str,
    get_str_list,
    get_table,
    is_str_dict,
)


def test_is_str_dict() -> None:
    assert is_str_dict({"a": 1})
    assert not is_str_dict({1: "a"})
    assert not is_str_dict(["a"])


def test_as_str_dict() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict("a") is None


def test_get_str_strips_and_rejects_blank() -> None:
    assert get_str({"k": "  v "}, "k") == "v"
    assert get_str({"k": "   "}, "k") is None
    assert get_str({"k": 1}, "k") is None
    assert get_str({}, "k") is None


def test_get_bool() -> None:
    assert get_bool({"k": True}, "k") is True
    assert get_bool({"k": 1}, "k") is None


def test_get_float_positive_only() -> None:
    assert get_float({"k": 2}, "k") == 2.0
    assert get_float({"k": 0.5}, "k") == 0.5
    assert get_float({"k": 0}, "k") is None
    assert get_float({"k": True}, "k") is None


def test_get_table() -> None:
    assert get_table({"t": {"a": 1}}, "t") == {"a": 1}
    assert get_table({"t": [1]}, "t") is None


def test_get_str_list() -> None:
    assert get_str_list({"k": ["a", " b ", ""]}, "k") == ("a", "b")
    assert get_str_list({"k": ["a", 1]}, "k") is None
    assert get_str_list({"k": "a"}, "k") is None
