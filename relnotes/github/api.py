"""GitHub REST API calls used for attribution.

Pure functions taking an HttpClient, so tests can use MockHttpClient.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from relnotes.core.result import Err, Ok, Result
from relnotes.core.structured import as_str_dict, get_str
from relnotes.github.http import HttpError

if TYPE_CHECKING:
    from relnotes.github.http import HttpClient

__all__ = [
    "GitHubApi",
    "fetch_pull_author",
    "fetch_repo_html_url",
]


@dataclass(frozen=True, slots=True)
class GitHubApi:
    """Connection details for one repository on a GitHub host.

    Attributes:
        api_url: REST base URL (e.g. "https://api.github.com")
        slug: Repository as "owner/repo"
        token: Bearer token, None for anonymous requests
    """

    api_url: str
    slug: str
    token: str | None = None

    def repo_endpoint(self) -> str:
        return f"{self.api_url}/repos/{self.slug}"

    def pull_endpoint(self, number: str) -> str:
        return f"{self.repo_endpoint()}/pulls/{number}"

    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def fetch_repo_html_url(http: HttpClient, api: GitHubApi) -> Result[str, HttpError]:
    """Fetch the canonical web URL of the repository.

    Returns:
        Ok with html_url (no trailing slash), or Err with HttpError
    """
    url = api.repo_endpoint()
    result = http.get_json(url, api.headers())
    if isinstance(result, Err):
        return result

    html_url = get_str(result.value, "html_url")
    if html_url is None:
        return Err(HttpError(url=url, status=0, message="Missing html_url in response"))
    return Ok(html_url.rstrip("/"))


def fetch_pull_author(http: HttpClient, api: GitHubApi, number: str) -> Result[str, HttpError]:
    """Fetch the login of the user who opened pull request ``number``.

    Returns:
        Ok with the login, or Err with HttpError
    """
    url = api.pull_endpoint(number)
    result = http.get_json(url, api.headers())
    if isinstance(result, Err):
        return result

    user = as_str_dict(result.value.get("user"))
    login = get_str(user, "login") if user is not None else None
    if login is None:
        return Err(HttpError(url=url, status=0, message="Missing user.login in response"))
    return Ok(login)
