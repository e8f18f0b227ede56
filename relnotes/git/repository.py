"""Read-only git repository access.

This module provides the Repository class used by the changelog engine to
list tags, resolve tag targets and page through commit history. Every
operation shells out to the git binary and returns a Result.

Usage:
    repo = Repository(Path("/path/to/monorepo"))

    match repo.resolve_commit("refs/tags/pkg-a@1.0.0"):
        case Ok(ref):
            print(ref.sha, ref.is_root)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from relnotes.core.result import Err, Ok, Result
from relnotes.platform.process import ProcessError
from relnotes.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_LOG_TIMEOUT_SECONDS = 2 * 60.0

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x00"

# sha, parents, committer time
_REF_FORMAT = "%H%x1f%P%x1f%ct"
# sha, parents, author name, committer time, raw message
_LOG_FORMAT = "%H%x1f%P%x1f%an%x1f%ct%x1f%B"

__all__ = [
    "CommitInfo",
    "CommitRef",
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class CommitRef:
    """A resolved commit used as a range boundary.

    Attributes:
        sha: Full commit hash
        parents: Parent hashes, first parent first
        timestamp: Committer time (UTC)
    """

    sha: str
    parents: tuple[str, ...]
    timestamp: datetime

    @property
    def is_root(self) -> bool:
        """True if the commit has no parent."""
        return not self.parents

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """A commit as read from `git log`.

    Attributes:
        sha: Full commit hash
        parents: Parent hashes
        author: Author name, None when git reports an empty identity
        timestamp: Committer time (UTC)
        message: Raw commit message (all lines)
    """

    sha: str
    parents: tuple[str, ...]
    author: str | None
    timestamp: datetime
    message: str


class Repository:
    """Git repository abstraction (read-only).

    A single instance can be shared by every package processed in a run.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository (worktree or gitfile)."""
        return (self.path / ".git").exists()

    def tag_names(self) -> Result[list[str], GitError]:
        """List every tag name in the repository.

        Returns:
            Ok(names) in git's ref order, Err(GitError) on failure
        """
        result = self._run(["for-each-ref", "--format=%(refname:strip=2)", "refs/tags"])
        match result:
            case Err(e):
                return Err(_git_error("for-each-ref", e, "cannot list tags"))
            case Ok(stdout):
                return Ok([line.strip() for line in stdout.splitlines() if line.strip()])

    def resolve_tag(self, name: str) -> Result[CommitRef, GitError]:
        """Resolve a tag (lightweight or annotated) to the commit it points at."""
        return self.resolve_commit(f"refs/tags/{name}")

    def resolve_commit(self, rev: str) -> Result[CommitRef, GitError]:
        """Resolve any revision to a commit with its parents.

        Args:
            rev: Revision (hash, full ref name, ...)

        Returns:
            Ok(CommitRef) on success
            Err(GitError) when the revision is unknown or not a commit
        """
        result = self._run(
            [
                "log",
                "-1",
                "--no-show-signature",
                f"--format={_REF_FORMAT}",
                f"{rev}^{{commit}}",
                "--",
            ]
        )
        match result:
            case Err(e):
                return Err(_git_error("log", e, f"cannot resolve {rev}"))
            case Ok(stdout):
                line = stdout.strip()
                parts = line.split(_FIELD_SEP)
                if len(parts) != 3:
                    return Err(
                        GitError(command="log", message=f"unexpected output for {rev}: {line!r}")
                    )
                sha, parents, ct = parts
                timestamp = _parse_time(ct)
                if timestamp is None:
                    return Err(
                        GitError(command="log", message=f"invalid commit time for {sha}: {ct!r}")
                    )
                return Ok(CommitRef(sha=sha, parents=tuple(parents.split()), timestamp=timestamp))

    def log_page(self, start: str, *, skip: int, limit: int) -> Result[list[CommitInfo], GitError]:
        """Read one page of history reachable from ``start``.

        Commits come in git's default reverse-chronological order, which is
        stable between calls, so pages can be concatenated. Message bytes are
        passed through untranscoded and must be valid UTF-8.

        Args:
            start: Commit to walk from
            skip: Number of commits to skip from the top
            limit: Maximum number of commits to return

        Returns:
            Ok(commits) (empty when history is exhausted)
            Err(GitError) on any failure, including undecodable messages
        """
        result = self._run(
            [
                "log",
                "-z",
                "--no-show-signature",
                "--encoding=none",
                f"--format={_LOG_FORMAT}",
                f"--skip={skip}",
                f"--max-count={limit}",
                start,
                "--",
            ],
            timeout=_GIT_LOG_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(_git_error("log", result.error, f"cannot read history from {start}"))

        commits: list[CommitInfo] = []
        for record in result.value.split(_RECORD_SEP):
            record = record.lstrip("\n")
            if not record:
                continue
            parsed = _parse_log_record(record)
            if isinstance(parsed, Err):
                return parsed
            commits.append(parsed.value)
        return Ok(commits)

    def remote_url(self, name: str = "origin") -> Result[str, GitError]:
        """Get the fetch URL of a remote."""
        result = self._run(["remote", "get-url", name])
        match result:
            case Err(e):
                return Err(_git_error("remote get-url", e, f"remote '{name}' not found"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(
        self, args: list[str], *, timeout: float = _GIT_TIMEOUT_SECONDS
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or fallback,
        returncode=error.returncode,
    )


def _parse_time(value: str) -> datetime | None:
    try:
        return datetime.fromtimestamp(int(value.strip()), tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None


def _parse_log_record(record: str) -> Result[CommitInfo, GitError]:
    """Parse one `git log -z` record produced with _LOG_FORMAT."""
    parts = record.split(_FIELD_SEP, 4)
    if len(parts) != 5:
        return Err(GitError(command="log", message=f"malformed log record: {record[:60]!r}"))

    sha, parents, author, ct, message = parts
    timestamp = _parse_time(ct)
    if timestamp is None:
        return Err(GitError(command="log", message=f"invalid commit time for {sha}: {ct!r}"))

    return Ok(
        CommitInfo(
            sha=sha,
            parents=tuple(parents.split()),
            author=author.strip() or None,
            timestamp=timestamp,
            message=message,
        )
    )
