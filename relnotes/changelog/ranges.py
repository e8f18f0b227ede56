"""Release window resolution from a package's tags.

Two modes:
- latest: newest tag against the previous one
- history: every consecutive pair of tags, newest first

The oldest tag has no older release to pair with. Its window ends at the
tag commit's first parent, or at the tag commit itself when it is the root
commit. The walk leaves a non-root end out, so only the tagged commit is
summarized. When that parent is the repository root it is summarized too.
"""

from __future__ import annotations

from relnotes.changelog.errors import ChangelogError, GraphTraversalError, NoTagsError
from relnotes.changelog.model import ReleaseWindow, Tag
from relnotes.changelog.tags import package_tags
from relnotes.core.result import Err, Ok, Result
from relnotes.git.repository import CommitRef, Repository

__all__ = ["resolve_history", "resolve_latest"]


def _sorted_tags(repo: Repository, scope: str) -> Result[list[str], ChangelogError]:
    names = repo.tag_names()
    if isinstance(names, Err):
        return Err(GraphTraversalError(message=names.error.message))

    tags = package_tags(names.value, scope)
    if not tags:
        return Err(NoTagsError(scope=scope))
    return Ok(tags)


def _one_step_boundary(
    repo: Repository, tag: str, start: CommitRef
) -> Result[CommitRef, ChangelogError]:
    if start.first_parent is None:
        return Ok(start)
    parent = repo.resolve_commit(start.first_parent)
    if isinstance(parent, Err):
        return Err(GraphTraversalError(message=parent.error.message, tag=tag))
    return Ok(parent.value)


def _window(
    repo: Repository, newer: str, older: str | None
) -> Result[ReleaseWindow, ChangelogError]:
    start = repo.resolve_tag(newer)
    if isinstance(start, Err):
        return Err(GraphTraversalError(message=start.error.message, tag=newer))

    if older is None:
        end = _one_step_boundary(repo, newer, start.value)
        if isinstance(end, Err):
            return end
        end_ref = end.value
    else:
        resolved = repo.resolve_tag(older)
        if isinstance(resolved, Err):
            return Err(GraphTraversalError(message=resolved.error.message, tag=older))
        end_ref = resolved.value

    return Ok(
        ReleaseWindow(
            tag=Tag.from_ref(newer, start.value),
            start=start.value,
            end=end_ref,
        )
    )


def resolve_latest(repo: Repository, scope: str) -> Result[ReleaseWindow, ChangelogError]:
    """Window of the newest release of ``scope``.

    Returns:
        Ok(window), Err(NoTagsError) without tags, Err(GraphTraversalError)
        when a boundary cannot be resolved
    """
    tags = _sorted_tags(repo, scope)
    if isinstance(tags, Err):
        return tags

    names = tags.value
    older = names[-2] if len(names) > 1 else None
    return _window(repo, names[-1], older)


def resolve_history(
    repo: Repository,
    scope: str,
    *,
    include_first_release: bool = False,
) -> Result[list[ReleaseWindow], ChangelogError]:
    """Windows for every release of ``scope``, newest first.

    With n tags this yields n - 1 windows, one per consecutive pair. A
    package with a single tag yields one window against that tag's parent.
    ``include_first_release`` adds the oldest tag's own window as well.
    """
    tags = _sorted_tags(repo, scope)
    if isinstance(tags, Err):
        return tags

    names = list(reversed(tags.value))
    pairs: list[tuple[str, str | None]] = list(zip(names, names[1:]))
    if len(names) == 1 or include_first_release:
        pairs.append((names[-1], None))

    windows: list[ReleaseWindow] = []
    for newer, older in pairs:
        window = _window(repo, newer, older)
        if isinstance(window, Err):
            return window
        windows.append(window.value)
    return Ok(windows)
