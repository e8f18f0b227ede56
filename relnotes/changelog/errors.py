"""Error types for changelog generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "AttributionLookupError",
    "ChangelogError",
    "GraphTraversalError",
    "NoTagsError",
    "WriteError",
]


@dataclass(frozen=True, slots=True)
class NoTagsError:
    """No tag carries the package scope with a semantic version suffix."""

    scope: str

    def pretty(self) -> str:
        return f"no release tags found for {self.scope}"


@dataclass(frozen=True, slots=True)
class GraphTraversalError:
    """The git backend failed while resolving or walking a release window.

    The whole window is abandoned; no partial commit list is produced.
    """

    message: str
    package: str | None = None
    tag: str | None = None

    def pretty(self) -> str:
        context = ", ".join(
            part
            for part in (
                f"package {self.package}" if self.package else "",
                f"tag {self.tag}" if self.tag else "",
            )
            if part
        )
        if context:
            return f"{self.message} ({context}; is the clone shallow or corrupt?)"
        return self.message


@dataclass(frozen=True, slots=True)
class AttributionLookupError:
    """A pull request author lookup failed. Recovered inside the resolver."""

    url: str
    message: str

    def pretty(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class WriteError:
    """Output documents could not be written."""

    message: str
    path: Path

    def pretty(self) -> str:
        return f"{self.message} (hint: {self.path})"


type ChangelogError = NoTagsError | GraphTraversalError
