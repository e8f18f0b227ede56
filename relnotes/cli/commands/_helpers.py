"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn, Protocol, TypeVar

import typer

from relnotes.core.errors import ErrorCode
from relnotes.core.result import Err, Result
from relnotes.output.console import ConsoleProtocol, Style

T = TypeVar("T")


class _PrettyError(Protocol):
    def pretty(self) -> str: ...


def fail(
    console: ConsoleProtocol,
    message: str,
    code: ErrorCode,
    *,
    hint: str | None = None,
) -> NoReturn:
    """Report an error and exit with ``code``."""
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(code))


def exit_on_error[T](
    result: Result[T, _PrettyError],
    console: ConsoleProtocol,
    error_code: ErrorCode,
) -> None:
    """Exit with ``error_code`` if result is Err, otherwise return.

    Expects error objects to render themselves through ``pretty()``.
    """
    if isinstance(result, Err):
        fail(console, result.error.pretty(), error_code)
