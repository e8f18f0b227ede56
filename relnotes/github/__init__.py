"""GitHub REST access (repository URL, pull request authors)."""

from relnotes.github.api import GitHubApi, fetch_pull_author, fetch_repo_html_url
from relnotes.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = [
    "GitHubApi",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "fetch_pull_author",
    "fetch_repo_html_url",
]
