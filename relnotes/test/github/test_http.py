"""Tests for github/http.py."""

from __future__ import annotations

import io
import urllib.error
from typing import Any
from unittest.mock import MagicMock, patch

from relnotes.core.result import Err, Ok
from relnotes.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


def _response(body: bytes) -> MagicMock:
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://x/y", status=404, message="Not Found")
        assert str(error) == "HTTP 404: Not Found (https://x/y)"

    def test_str_network(self) -> None:
        error = HttpError(url="https://x/y", status=0, message="timed out")
        assert str(error) == "timed out (https://x/y)"


class TestRealHttpClient:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_get_json_sends_headers(self) -> None:
        client = RealHttpClient(timeout=3.0, user_agent="relnotes/test")
        captured: dict[str, Any] = {}

        def fake_urlopen(req: Any, timeout: float, context: Any) -> MagicMock:
            captured["headers"] = dict(req.header_items())
            captured["timeout"] = timeout
            return _response(b'{"html_url": "https://github.com/acme/mono"}')

        with patch("urllib.request.urlopen", side_effect=fake_urlopen):
            result = client.get_json("https://api.github.com/repos/acme/mono", {"Accept": "a/b"})

        assert result == Ok({"html_url": "https://github.com/acme/mono"})
        assert captured["timeout"] == 3.0
        assert captured["headers"]["User-agent"] == "relnotes/test"
        assert captured["headers"]["Accept"] == "a/b"

    def test_http_error_status(self) -> None:
        client = RealHttpClient()
        error = urllib.error.HTTPError(
            "https://api.github.com/x",
            403,
            "Forbidden",
            {},  # type: ignore[arg-type]
            io.BytesIO(b""),
        )

        with patch("urllib.request.urlopen", side_effect=error):
            result = client.get_json("https://api.github.com/x")

        assert isinstance(result, Err)
        assert result.error.status == 403
        assert result.error.message == "Forbidden"

    def test_network_error(self) -> None:
        client = RealHttpClient()

        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("no route")):
            result = client.get_json("https://api.github.com/x")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.message == "no route"

    def test_timeout(self) -> None:
        client = RealHttpClient()

        with patch("urllib.request.urlopen", side_effect=TimeoutError()):
            result = client.get_json("https://api.github.com/x")

        assert isinstance(result, Err)
        assert result.error.message == "Request timed out"

    def test_invalid_json(self) -> None:
        client = RealHttpClient()

        with patch("urllib.request.urlopen", return_value=_response(b"<html>")):
            result = client.get_json("https://api.github.com/x")

        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message

    def test_non_object_json(self) -> None:
        client = RealHttpClient()

        with patch("urllib.request.urlopen", return_value=_response(b"[1, 2]")):
            result = client.get_json("https://api.github.com/x")

        assert isinstance(result, Err)
        assert result.error.message == "Expected JSON object"


class TestMockHttpClient:
    def test_registered_response(self) -> None:
        client = MockHttpClient()
        client.set_json("https://x", {"a": 1})

        assert client.get_json("https://x", {"Authorization": "Bearer t"}) == Ok({"a": 1})
        assert client.calls == [("https://x", {"Authorization": "Bearer t"})]

    def test_registered_error(self) -> None:
        client = MockHttpClient()
        error = HttpError(url="https://x", status=500, message="Server Error")
        client.set_json("https://x", error)

        assert client.get_json("https://x") == Err(error)

    def test_unknown_url_is_404(self) -> None:
        client = MockHttpClient()

        result = client.get_json("https://missing")

        assert isinstance(result, Err)
        assert result.error.status == 404
        assert client.urls == ["https://missing"]
