"""
innertube.py — Minimal client for the platform's internal JSON API.

The client signs and posts one request at a time.  It does not retry: a
failure is mapped onto the engine's error hierarchy and raised to the caller,
which decides whether it is fatal.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import TransportError, UpstreamShapeError, UpstreamStatusError
from yt_subtitles.session import SessionContext

logger = logging.getLogger(__name__)


def dig(data: Any, *path: str | int) -> Any:
    """
    Follow a fixed key path through upstream JSON.

    String steps index dicts, integer steps index lists.  Every step is
    presence-checked.

    Raises:
        UpstreamShapeError: A link is missing or has the wrong type.  The
                            message names the path walked so far.
    """
    current = data
    walked: list[str] = []
    for step in path:
        walked.append(f"[{step}]" if isinstance(step, int) else str(step))
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                raise UpstreamShapeError(".".join(walked))
            current = current[step]
        else:
            if not isinstance(current, dict) or current.get(step) is None:
                raise UpstreamShapeError(".".join(walked))
            current = current[step]
    return current


class InnerTubeClient:
    """
    Posts JSON payloads to named internal endpoints.

    Args:
        config: Engine configuration (key, base URL, client identity).
        http:   A requests.Session to send through; a new one is created when
                None.  Tests pass a MagicMock here.
    """

    def __init__(self, config: EngineConfig, http: requests.Session | None = None) -> None:
        self.config = config
        self.http = http if http is not None else requests.Session()

    def headers(self, session: SessionContext) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
            "X-Goog-Visitor-Id": session.visitor_data,
            "X-Youtube-Client-Name": self.config.client_name_id,
            "X-Youtube-Client-Version": self.config.client_version,
            "Origin": self.config.origin,
            "Referer": f"{self.config.origin}/",
        }

    def call(
        self,
        endpoint: str,
        payload: dict[str, Any],
        session: SessionContext,
    ) -> dict[str, Any]:
        """
        POST `payload` (plus the session context) to `{base_url}/{endpoint}`.

        Returns:
            The parsed JSON object.

        Raises:
            TransportError:      The request could not complete, or the body
                                 was not a JSON object.
            UpstreamStatusError: The endpoint answered with a non-2xx status.
        """
        url = f"{self.config.base_url}/{endpoint}"
        body = {"context": session.payload(), **payload}

        logger.debug("POST %s", url)
        try:
            response = self.http.post(
                url,
                params={"key": self.config.api_key},
                json=body,
                headers=self.headers(session),
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(endpoint, reason=str(exc)) from exc

        if not response.ok:
            raise UpstreamStatusError(endpoint, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(endpoint, reason="response body is not JSON") from exc

        if not isinstance(data, dict):
            raise TransportError(endpoint, reason="response body is not a JSON object")
        return data
