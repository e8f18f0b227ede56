"""HTTP client abstraction for the GitHub REST API.

This module provides:
- HttpClient: Protocol for JSON GET requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from relnotes import __version__
from relnotes.core.result import Err, Ok, Result
from relnotes.core.structured import as_str_dict

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network and decoding errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations."""

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse the body as a JSON object.

        Args:
            url: URL to fetch
            headers: Extra request headers (auth, accept)

        Returns:
            Ok with parsed JSON dict, or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Every request is bounded by ``timeout``; there are no retries.
    """

    def __init__(self, timeout: float = 10.0, user_agent: str = f"relnotes/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(self, url: str, headers: Mapping[str, str] | None) -> Result[bytes, HttpError]:
        all_headers = {"User-Agent": self.user_agent}
        if headers:
            all_headers.update(headers)
        try:
            req = urllib.request.Request(url, headers=all_headers)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[dict[str, Any], HttpError]:
        result = self._request(url, headers)
        if isinstance(result, Err):
            return result

        try:
            data_obj: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/o/r", {"html_url": "..."})
        result = client.get_json("https://api.github.com/repos/o/r")
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self.calls: list[tuple[str, dict[str, str]]] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[dict[str, Any], HttpError]:
        self.calls.append((url, dict(headers or {})))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]
