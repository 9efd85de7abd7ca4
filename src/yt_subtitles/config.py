"""
config.py — Static engine configuration.

The internal API needs a key, a base URL and a client version string.  None
of them are user-supplied: a deployment provides its own values, usually via
environment variables or a `.env` file.  The engine never reads the
environment itself — an EngineConfig is built once and passed in.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from yt_subtitles.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://www.youtube.com/youtubei/v1"
DEFAULT_ORIGIN = "https://www.youtube.com"
DEFAULT_CLIENT_NAME = "WEB"
DEFAULT_CLIENT_NAME_ID = "1"
DEFAULT_CLIENT_VERSION = "2.20210721.00.00"
DEFAULT_TIMEOUT_SECS = 10.0

# Sent on internal API calls so the platform can tell who is calling.
DEFAULT_USER_AGENT = "yt-subtitles/0.1 (+https://github.com/yt-subtitles/yt-subtitles)"

# Caption documents are plain static files; a browser UA is all they need.
DEFAULT_CAPTION_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Environment variable names read by EngineConfig.from_env().
ENV_API_KEY = "YOUTUBE_API"
ENV_BASE_URL = "YOUTUBE_API_BASE_URL"
ENV_CLIENT_VERSION = "YOUTUBE_CLIENT_VERSION"
ENV_TIMEOUT = "YOUTUBE_REQUEST_TIMEOUT"


@dataclass(frozen=True)
class EngineConfig:
    """
    Process-wide, read-only settings for the extraction engine.

    frozen=True so one instance can be shared between concurrent
    extractions without anyone mutating it underneath the others.

    Attributes:
        api_key:            Internal-API key, sent as the `key` query param.
        base_url:           Internal-API base, e.g. https://www.youtube.com/youtubei/v1
        client_name:        Client name placed in the request context.
        client_name_id:     Numeric client id sent as X-Youtube-Client-Name.
        client_version:     Client version for the context and headers.
        origin:             The platform's web origin (Origin / Referer).
        user_agent:         User-agent for internal API calls.
        caption_user_agent: User-agent for caption document downloads.
        timeout:            Per-request deadline in seconds.
    """
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    client_name: str = DEFAULT_CLIENT_NAME
    client_name_id: str = DEFAULT_CLIENT_NAME_ID
    client_version: str = DEFAULT_CLIENT_VERSION
    origin: str = DEFAULT_ORIGIN
    user_agent: str = DEFAULT_USER_AGENT
    caption_user_agent: str = DEFAULT_CAPTION_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT_SECS

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Internal API key is not configured")
        if not self.base_url:
            raise ConfigurationError("Internal API base URL is not configured")
        if not self.client_version:
            raise ConfigurationError("Client version is not configured")
        if self.timeout <= 0:
            raise ConfigurationError(f"Request timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """
        Build a config from environment variables (and a `.env` file).

        Existing environment variables win over `.env` entries.

        Raises:
            ConfigurationError: YOUTUBE_API is unset, or the timeout is not a number.
        """
        load_dotenv(override=False)

        api_key = os.getenv(ENV_API_KEY, "").strip()
        if not api_key:
            raise ConfigurationError(
                f"{ENV_API_KEY} is not set. Please set it in your .env file or environment."
            )

        raw_timeout = os.getenv(ENV_TIMEOUT, "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECS
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_TIMEOUT} must be a number of seconds, got {raw_timeout!r}"
            ) from exc

        return cls(
            api_key=api_key,
            base_url=os.getenv(ENV_BASE_URL, DEFAULT_BASE_URL).rstrip("/"),
            client_version=os.getenv(ENV_CLIENT_VERSION, DEFAULT_CLIENT_VERSION),
            timeout=timeout,
        )
