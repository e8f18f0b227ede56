"""Git access for changelog generation.

Usage:
    from relnotes.git import Repository

    repo = Repository(Path("/path/to/monorepo"))
    tags = repo.tag_names()
"""

from relnotes.git.remote import parse_remote_slug
from relnotes.git.repository import (
    CommitInfo,
    CommitRef,
    GitError,
    Repository,
)

__all__ = [
    "CommitInfo",
    "CommitRef",
    "GitError",
    "Repository",
    "parse_remote_slug",
]
