"""Result type for explicit error handling.

Every fallible step of changelog generation (reading tags, walking history,
looking up pull requests, writing documents) returns a Result instead of
raising. Callers decide per package whether a failure is skippable.

Usage:
    match resolve_latest(repo, "@scope/pkg"):
        case Ok(window):
            print(window.tag.name)
        case Err(error):
            print(error.pretty())
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding ``value``."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply ``f`` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding ``error``."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
