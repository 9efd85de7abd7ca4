"""
errors.py — Custom exception hierarchy for yt-subtitles.

Every exception carries an `http_status` attribute so the FastAPI error
handler can translate engine-level errors directly into the correct HTTP
response code without a separate mapping table.

Hierarchy:
    SubtitleError (base, 500)
    ├── ConfigurationError (500)
    ├── InvalidInputError (400)
    ├── TransportError (502)
    ├── UpstreamStatusError (502)
    │   └── CaptionFetchError (502)
    └── UpstreamShapeError (502)

Only ConfigurationError, InvalidInputError, TransportError and
UpstreamStatusError ever leave the engine.  CaptionFetchError and
UpstreamShapeError are raised inside the extraction strategies and are
absorbed by the service as "no subtitles".
"""


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class SubtitleError(Exception):
    """
    Root exception for all subtitle-extraction errors.

    Attributes:
        message:     Human-readable description of what went wrong.
        http_status: Suggested HTTP status code for the API layer.
    """

    def __init__(self, message: str, http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status


# ---------------------------------------------------------------------------
# Setup / input errors
# ---------------------------------------------------------------------------

class ConfigurationError(SubtitleError):
    """
    Raised when required static configuration is missing or invalid.

    Typically the internal-API key was not provided.  Extraction cannot
    run at all, so this maps to HTTP 500.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message=message, http_status=500)


class InvalidInputError(SubtitleError):
    """
    Raised when the video identifier is absent or malformed.

    Always raised before any network call.  Maps to HTTP 400.
    """

    def __init__(self, value: str | None, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(
            message=f"Invalid video identifier: {value!r}{detail}",
            http_status=400,
        )
        self.value = value


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class TransportError(SubtitleError):
    """
    Raised when a request to the platform could not complete.

    Covers DNS failures, refused connections, timeouts and bodies that are
    not the JSON the endpoint promises.  Maps to HTTP 502.
    """

    def __init__(self, endpoint: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Request to {endpoint} failed{detail}",
            http_status=502,
        )
        self.endpoint = endpoint


class UpstreamStatusError(SubtitleError):
    """
    Raised when the platform answered with a non-success HTTP status.

    The upstream status is kept on `status`; the API layer still answers
    502 because the failure is on the platform's side, not ours.
    """

    def __init__(self, endpoint: str, status: int) -> None:
        super().__init__(
            message=f"{endpoint} returned HTTP {status}",
            http_status=502,
        )
        self.endpoint = endpoint
        self.status = status


class CaptionFetchError(UpstreamStatusError):
    """
    Raised when a caption-track document cannot be downloaded.

    `status` is None when the request never got a response.
    """

    def __init__(self, video_id: str, status: int | None = None, reason: str = "") -> None:
        SubtitleError.__init__(
            self,
            message=(
                f"Caption track for video {video_id} could not be fetched"
                + (f": HTTP {status}" if status is not None else "")
                + (f": {reason}" if reason else "")
            ),
            http_status=502,
        )
        self.endpoint = "timedtext"
        self.status = status
        self.video_id = video_id


class UpstreamShapeError(SubtitleError):
    """
    Raised when an expected key path is missing from an upstream response.

    The internal API's response shape varies by video and account state, so
    this is an expected outcome and is always turned into an empty result.
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Upstream response has no {path}",
            http_status=502,
        )
        self.path = path
