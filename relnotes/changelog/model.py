from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from relnotes.git.repository import CommitInfo, CommitRef


@dataclass(frozen=True, slots=True)
class Tag:
    """A release tag and the UTC date (YYYY-MM-DD) of the commit it points at."""

    name: str
    release_date: str

    @classmethod
    def from_ref(cls, name: str, ref: CommitRef) -> Tag:
        return cls(name=name, release_date=ref.timestamp.strftime("%Y-%m-%d"))


@dataclass(frozen=True, slots=True)
class CommitRecord:
    hash: str
    message: str
    author: str | None
    timestamp: datetime

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    @classmethod
    def from_info(cls, info: CommitInfo) -> CommitRecord:
        lines = info.message.splitlines()
        first = lines[0].strip() if lines else ""
        return cls(hash=info.sha, message=first, author=info.author, timestamp=info.timestamp)


@dataclass(frozen=True, slots=True)
class ReleaseWindow:
    """Commits between two boundaries; ``start`` is the newer one."""

    tag: Tag
    start: CommitRef
    end: CommitRef


@dataclass(frozen=True, slots=True)
class PackageChangelog:
    """Rendered markdown document for one package."""

    package: str
    content: str
    releases: int
    entries: int
