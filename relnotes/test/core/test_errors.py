"""Tests for relnotes.core.errors module."""

from relnotes.core.errors import ErrorCode


class TestErrorCode:
    def test_stable_values(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.CONFIG_ERROR == 2
        assert ErrorCode.GIT_ERROR == 3
        assert ErrorCode.NETWORK_ERROR == 4
        assert ErrorCode.IO_ERROR == 5

    def test_str(self) -> None:
        assert str(ErrorCode.CONFIG_ERROR) == "config error"
