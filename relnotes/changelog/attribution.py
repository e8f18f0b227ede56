"""Attribution lines for changelog entries.

A commit whose subject references a pull request, e.g.
``fix(form): keep focus (#42)``, is credited to the GitHub user who opened
that pull request:

    fix(form): keep focus (#42). [#42](https://gh/o/r/pull/42) [@alice](https://gh/alice)

Other commits link to the commit itself:

    fix(form): keep focus. [1a2b3c4](https://gh/o/r/commit/1a2b3c4)

Resolved logins are memoized per commit-author string for the whole run, so
an author whose pull requests appear in several packages costs one request.
A failed lookup never fails the changelog: the commit author name is shown
instead, and only linked to a profile when it is shaped like a login.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from relnotes.changelog.errors import AttributionLookupError
from relnotes.changelog.model import CommitRecord
from relnotes.core.result import Err, Ok, Result
from relnotes.github.api import GitHubApi, fetch_pull_author
from relnotes.github.http import HttpClient
from relnotes.output.console import ConsoleProtocol

__all__ = [
    "AuthorCache",
    "AuthorResolver",
    "find_pull_request",
]

_PR_RE = re.compile(r"\(#([0-9]+)\)")
_LOGIN_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")


def find_pull_request(message: str) -> str | None:
    """Number of the first ``(#<digits>)`` reference in ``message``."""
    m = _PR_RE.search(message)
    return m.group(1) if m else None


def _empty_handles() -> dict[str, str]:
    return {}


@dataclass
class AuthorCache:
    """Commit author name -> GitHub login. Unbounded, never evicted.

    Keyed by author name rather than pull request: an author's login is
    assumed stable across their pull requests.
    """

    _handles: dict[str, str] = field(default_factory=_empty_handles)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get(self, author: str) -> str | None:
        with self._lock:
            return self._handles.get(author)

    def put(self, author: str, handle: str) -> str:
        """Store ``handle`` unless one is already cached; return the cached one."""
        with self._lock:
            return self._handles.setdefault(author, handle)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __contains__(self, author: object) -> bool:
        with self._lock:
            return author in self._handles


type PullAuthorLookup = Callable[[str], Result[str, AttributionLookupError]]


class AuthorResolver:
    """Render attribution for commits.

    Args:
        repo_url: Web URL of the repository, used for pull and commit links
        web_url: Web URL of the host, used for user profile links
        lookup: Pull request number -> login; None disables lookups
        cache: Shared author cache
        console: Receives a warning for each failed lookup
    """

    def __init__(
        self,
        *,
        repo_url: str,
        web_url: str,
        lookup: PullAuthorLookup | None,
        cache: AuthorCache | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.repo_url = repo_url.rstrip("/")
        self.web_url = web_url.rstrip("/")
        self._lookup = lookup
        self.cache = cache if cache is not None else AuthorCache()
        self._console = console

    @classmethod
    def for_github(
        cls,
        *,
        http: HttpClient,
        api: GitHubApi,
        repo_url: str,
        web_url: str,
        cache: AuthorCache | None = None,
        console: ConsoleProtocol | None = None,
    ) -> AuthorResolver:
        def lookup(number: str) -> Result[str, AttributionLookupError]:
            result = fetch_pull_author(http, api, number)
            if isinstance(result, Err):
                error = result.error
                return Err(AttributionLookupError(url=error.url, message=error.message))
            return Ok(result.value)

        return cls(repo_url=repo_url, web_url=web_url, lookup=lookup, cache=cache, console=console)

    def attribute(self, commit: CommitRecord) -> str:
        """Markdown entry text for ``commit``. Never raises on lookup failure."""
        number = find_pull_request(commit.message)
        if number is None:
            short = commit.short_hash
            return f"{commit.message}. [{short}]({self.repo_url}/commit/{short})"

        entry = f"{commit.message}. [#{number}]({self.repo_url}/pull/{number})"
        handle = self.resolve_handle(number, commit.author)
        if handle is None:
            return entry
        if _LOGIN_RE.match(handle) is None:
            # Author names that cannot be logins get no profile link.
            return f"{entry} @{handle}"
        return f"{entry} [@{handle}]({self.web_url}/{handle})"

    def resolve_handle(self, number: str, author: str | None) -> str | None:
        """Login for pull request ``number``; falls back to ``author``."""
        if author is not None:
            cached = self.cache.get(author)
            if cached is not None:
                return cached

        if self._lookup is None:
            return author

        result = self._lookup(number)
        if isinstance(result, Err):
            if self._console is not None:
                fallback = author if author is not None else "no attribution"
                self._console.warning(
                    f"cannot resolve author of #{number}: {result.error.pretty()}; using {fallback}"
                )
            return author

        if author is None:
            return result.value
        return self.cache.put(author, result.value)
