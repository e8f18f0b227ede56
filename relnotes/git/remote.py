"""Remote URL parsing."""

from __future__ import annotations

import re

__all__ = ["parse_remote_slug"]

# git@github.com:owner/repo.git, ssh://git@github.com/owner/repo, https://github.com/owner/repo.git
_SCP_RE = re.compile(r"^[\w.-]+@[\w.-]+:(?P<path>[^/].*)$")
_URL_RE = re.compile(r"^[a-z+]+://(?:[^@/]+@)?[^/]+/(?P<path>.+)$")


def parse_remote_slug(url: str) -> str | None:
    """Extract "owner/repo" from a remote URL.

    Returns None when the URL does not name exactly an owner and a repository.
    """
    url = url.strip()
    m = _SCP_RE.match(url) or _URL_RE.match(url)
    if m is None:
        return None

    path = m.group("path").strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]

    parts = path.split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return f"{parts[0]}/{parts[1]}"
