"""
yt_subtitles — Extract timed YouTube subtitles through the internal API.

Public API:
    get_subtitles()        Fetch subtitles for a video ID.
    get_video_details()    Fetch title, description and subtitles.
    extract()              High-level one-call interface (URL → formatted output).
    parse_video_id()       Parse a YouTube URL or validate a bare video ID.
    SubtitleService        Reusable engine bound to one EngineConfig.
    EngineConfig           Static configuration (API key, base URL, client version).
    Subtitle, VideoDetails Result types.

Exception hierarchy (all importable from this package):
    SubtitleError                 Base exception for all extraction errors.
    ├── ConfigurationError        Required configuration missing.
    ├── InvalidInputError         Video ID absent or malformed.
    ├── TransportError            Upstream request could not complete.
    ├── UpstreamStatusError       Upstream answered with a non-2xx status.
    │   └── CaptionFetchError     Caption document download failed.
    └── UpstreamShapeError        Expected upstream JSON path missing.

Usage:
    from yt_subtitles import EngineConfig, SubtitleService
    service = SubtitleService(EngineConfig(api_key="..."))
    for subtitle in service.get_subtitles("dQw4w9WgXcQ"):
        print(subtitle.start, subtitle.text)
"""

from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import (
    CaptionFetchError,
    ConfigurationError,
    InvalidInputError,
    SubtitleError,
    TransportError,
    UpstreamShapeError,
    UpstreamStatusError,
)
from yt_subtitles.extractor import (
    SubtitleService,
    extract,
    get_subtitles,
    get_video_details,
    parse_video_id,
)
from yt_subtitles.models import Subtitle, VideoDetails

__all__ = [
    "get_subtitles",
    "get_video_details",
    "extract",
    "parse_video_id",
    "SubtitleService",
    "EngineConfig",
    "Subtitle",
    "VideoDetails",
    "SubtitleError",
    "ConfigurationError",
    "InvalidInputError",
    "TransportError",
    "UpstreamStatusError",
    "CaptionFetchError",
    "UpstreamShapeError",
]
