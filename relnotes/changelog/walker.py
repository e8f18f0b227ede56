"""Linearize the history of one release window.

Commits are read from the window's newer boundary in git's default
reverse-chronological order, page by page, until the older boundary is
reached.
"""

from __future__ import annotations

from enum import Enum

from relnotes.changelog.errors import GraphTraversalError
from relnotes.changelog.model import CommitRecord, ReleaseWindow
from relnotes.core.result import Err, Ok, Result
from relnotes.git.repository import Repository

__all__ = ["BoundaryRule", "walk_window"]

DEFAULT_PAGE_SIZE = 200


class BoundaryRule(Enum):
    """Whether the older boundary commit belongs to the window."""

    EXCLUSIVE = "exclusive"
    INCLUSIVE_IF_ROOT = "inclusive-if-root"

    def includes_end(self, end_is_root: bool) -> bool:
        return self is BoundaryRule.INCLUSIVE_IF_ROOT and end_is_root


def walk_window(
    repo: Repository,
    window: ReleaseWindow,
    rule: BoundaryRule = BoundaryRule.INCLUSIVE_IF_ROOT,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Result[list[CommitRecord], GraphTraversalError]:
    """Commits of ``window``, newest first.

    The walk stops at ``window.end``. The end commit itself is only part of
    the result when it is the root commit and ``rule`` allows it. If the end
    commit is never met, the walk runs to the end of history.

    Any git failure aborts the walk; no partial list is returned.
    """
    end_sha = window.end.sha
    include_end = rule.includes_end(window.end.is_root)

    commits: list[CommitRecord] = []
    skip = 0
    while True:
        page = repo.log_page(window.start.sha, skip=skip, limit=page_size)
        if isinstance(page, Err):
            return Err(GraphTraversalError(message=page.error.message, tag=window.tag.name))

        for info in page.value:
            if info.sha == end_sha:
                if include_end:
                    commits.append(CommitRecord.from_info(info))
                return Ok(commits)
            commits.append(CommitRecord.from_info(info))

        if len(page.value) < page_size:
            return Ok(commits)
        skip += page_size
