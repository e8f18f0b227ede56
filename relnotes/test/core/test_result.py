"""Tests for relnotes.core.result module."""

import pytest

from relnotes.core.result import Err, Ok, Result


class TestOk:
    def test_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_repr(self) -> None:
        assert repr(Ok("a")) == "Ok('a')"

    def test_equality(self) -> None:
        assert Ok(42) == Ok(42)
        assert Ok(42) != Ok(0)
        assert Ok(42) != Err(42)

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]


class TestErr:
    def test_map_is_noop(self) -> None:
        assert Err("boom").map(lambda x: x * 2) == Err("boom")

    def test_repr(self) -> None:
        assert repr(Err(3)) == "Err(3)"


class TestPatternMatching:
    def test_match_ok(self) -> None:
        result: Result[int, str] = Ok(5)
        match result:
            case Ok(value):
                assert value == 5
            case Err(_):
                pytest.fail("expected Ok")

    def test_match_err(self) -> None:
        result: Result[int, str] = Err("bad")
        match result:
            case Ok(_):
                pytest.fail("expected Err")
            case Err(error):
                assert error == "bad"
