"""
conftest.py — Shared fixtures: a fixture config and a fake HTTP session.

FakeHttp stands in for requests.Session.  Responses are registered per
internal endpoint (the last path segment of the POST URL) and, for caption
documents, one GET response.  Every call is recorded so tests can assert on
URLs, headers and bodies.
"""

from __future__ import annotations

import random
from typing import Any

import pytest

from yt_subtitles.config import EngineConfig

_NO_JSON = object()


class FakeResponse:
    """The slice of requests.Response the engine uses."""

    def __init__(self, status: int = 200, json_data: Any = _NO_JSON, text: str = "") -> None:
        self.status_code = status
        self.ok = 200 <= status < 400
        self._json = json_data
        self.text = text

    def json(self) -> Any:
        if self._json is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeHttp:
    """Records calls and replays canned responses."""

    def __init__(self) -> None:
        self.post_responses: dict[str, FakeResponse | Exception] = {}
        self.get_response: FakeResponse | Exception | None = None
        self.posts: list[tuple[str, dict[str, Any]]] = []
        self.gets: list[tuple[str, dict[str, Any]]] = []

    # -- registration -------------------------------------------------------

    def on_post(
        self,
        endpoint: str,
        json_data: Any = _NO_JSON,
        status: int = 200,
        raises: Exception | None = None,
    ) -> None:
        self.post_responses[endpoint] = raises if raises is not None else FakeResponse(status, json_data)

    def on_get(self, text: str = "", status: int = 200, raises: Exception | None = None) -> None:
        self.get_response = raises if raises is not None else FakeResponse(status, text=text)

    # -- requests.Session surface ------------------------------------------

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        endpoint = url.rsplit("/", 1)[-1]
        self.posts.append((endpoint, kwargs))
        result = self.post_responses.get(endpoint)
        if result is None:
            raise AssertionError(f"Unexpected POST to {endpoint}")
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.gets.append((url, kwargs))
        if self.get_response is None:
            raise AssertionError(f"Unexpected GET {url}")
        if isinstance(self.get_response, Exception):
            raise self.get_response
        return self.get_response

    # -- inspection ---------------------------------------------------------

    @property
    def posted_endpoints(self) -> list[str]:
        return [endpoint for endpoint, _ in self.posts]


@pytest.fixture()
def config() -> EngineConfig:
    """A fixture config that never touches the environment."""
    return EngineConfig(
        api_key="test-key",
        base_url="https://www.youtube.com/youtubei/v1",
        client_version="2.20210721.00.00",
        timeout=5.0,
    )


@pytest.fixture()
def fake_http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture()
def rng() -> random.Random:
    """Seeded so visitor tokens are repeatable within a test."""
    return random.Random(1234)
