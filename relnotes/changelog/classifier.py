"""Pick the commits that belong to a package.

A commit belongs to a package when its first message line carries a scoped
header whose scope is the package name, compared case-insensitively.

Two matchers are provided. LEGACY_SCOPE_PATTERN reproduces the historical
expression ``[fix|feat]\\(scope\\)``: the leading part is a character class,
so any header whose type ends in one of ``f i x | e a t`` matches
(``fix(form)``, ``feat(form)``, ``chore(form)``, ``revert(form)`` but not
``docs(form)``), anywhere in the line. Its scope class has no ``-``.
CONVENTIONAL_SCOPE_PATTERN only accepts ``fix(scope):`` and ``feat(scope):``
at the start of the line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from relnotes.changelog.model import CommitRecord

__all__ = [
    "CONVENTIONAL_SCOPE_PATTERN",
    "LEGACY_SCOPE_PATTERN",
    "CommitClassifier",
    "ScopedHeaderClassifier",
    "classify",
]

LEGACY_SCOPE_PATTERN = r"[fix|feat]\(([0-9a-zA-Z_]*)\)"
CONVENTIONAL_SCOPE_PATTERN = r"^(?:fix|feat)\(([0-9a-zA-Z_-]*)\)!?:"


class CommitClassifier(Protocol):
    def matches(self, message: str, package: str) -> bool:
        """True if ``message`` (first line) documents a change to ``package``."""
        ...

    def accepts(self, package: str) -> bool:
        """True if some commit header could name ``package`` at all."""
        ...


class ScopedHeaderClassifier:
    """Match ``type(scope)`` headers; the first capture group is the scope."""

    def __init__(self, pattern: str = LEGACY_SCOPE_PATTERN) -> None:
        self._re = re.compile(pattern)

    @classmethod
    def strict(cls) -> ScopedHeaderClassifier:
        return cls(CONVENTIONAL_SCOPE_PATTERN)

    def matches(self, message: str, package: str) -> bool:
        m = self._re.search(message)
        if m is None:
            return False
        return m.group(1).lower() == package.lower()

    def accepts(self, package: str) -> bool:
        return self.matches(f"fix({package}): x", package)


def classify(
    commits: Iterable[CommitRecord],
    package: str,
    classifier: CommitClassifier,
    seen: set[str] | None = None,
) -> list[CommitRecord]:
    """Commits matching ``package``, in input order, each hash at most once.

    Pass the same ``seen`` set for every window of a package so a commit
    reached from two windows is only listed under the first one.
    """
    if seen is None:
        seen = set()

    selected: list[CommitRecord] = []
    for commit in commits:
        if commit.hash in seen:
            continue
        if classifier.matches(commit.message, package):
            seen.add(commit.hash)
            selected.append(commit)
    return selected
