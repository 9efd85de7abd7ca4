"""
extractor.py — Subtitle service: the public face of the extraction engine.

Exposes a clean, high-level interface for:

    1. Parsing YouTube URLs / IDs   → parse_video_id()
    2. Fetching subtitles           → SubtitleService.get_subtitles()
    3. Fetching title + subtitles   → SubtitleService.get_video_details()
    4. Formatting output            → format_text(), format_json(), format_plain()
    5. One-call convenience         → extract()

Resolution policy: the player data is fetched first (failures there are
fatal), then each extraction strategy is tried in order — transcript panel,
then caption track — until one yields subtitles.  A strategy that fails is
logged and counts as "no subtitles", because a video without a transcript
is a normal outcome, not an error.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Any, Protocol

import requests

from yt_subtitles.captions import CaptionTrackStrategy
from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import InvalidInputError, SubtitleError
from yt_subtitles.innertube import InnerTubeClient
from yt_subtitles.models import NO_DESCRIPTION, NO_TITLE, Subtitle, VideoDetails, VideoInfo
from yt_subtitles.panel import TranscriptPanelStrategy
from yt_subtitles.resolver import resolve_video_info, video_description, video_title
from yt_subtitles.session import new_session
from yt_subtitles.text import subtitles_to_text

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Regex patterns that cover the most common YouTube URL shapes:
#   - https://www.youtube.com/watch?v=VIDEO_ID
#   - https://youtu.be/VIDEO_ID
#   - https://www.youtube.com/embed/VIDEO_ID
#   - https://www.youtube.com/shorts/VIDEO_ID
#   - https://www.youtube.com/v/VIDEO_ID
# Each pattern captures the 11-character video ID in group "id".
_URL_PATTERNS: list[re.Pattern[str]] = [
    # Watch URL (any host variant, e.g. m.youtube.com) — ID in the "v" param
    re.compile(r"(?:https?://)?(?:[\w-]+\.)?youtube\.com/watch\?(?:.*&)?v=(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"),
    # Short share URL — ID is the path segment right after the domain
    re.compile(r"(?:https?://)?youtu\.be/(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"),
    # Embed / shorts / old "v/" URLs — ID follows the path prefix
    re.compile(r"(?:https?://)?(?:[\w-]+\.)?youtube\.com/(?:embed|shorts|v)/(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"),
]

# A bare video ID is exactly 11 characters from the base64url alphabet.
_BARE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

_LANG_PATTERN = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$")

DEFAULT_LANG = "en"


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def parse_video_id(url_or_id: str | None) -> str:
    """
    Extract a YouTube video ID from a URL string, or validate a raw 11-char ID.

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        InvalidInputError: If the input is empty or matches no known format.
    """
    if not url_or_id or not url_or_id.strip():
        raise InvalidInputError(url_or_id, reason="empty")
    url_or_id = url_or_id.strip()

    for pattern in _URL_PATTERNS:
        match = pattern.search(url_or_id)
        if match:
            return match.group("id")

    if _BARE_ID_PATTERN.match(url_or_id):
        return url_or_id

    raise InvalidInputError(url_or_id, reason="not a YouTube URL or video ID")


def validate_video_id(video_id: str | None) -> str:
    """Accept only a bare 11-character ID; raise InvalidInputError otherwise."""
    if not video_id or not _BARE_ID_PATTERN.match(video_id):
        raise InvalidInputError(video_id, reason="expected an 11-character video ID")
    return video_id


def _normalize_lang(lang: str | None) -> str:
    if not lang:
        return DEFAULT_LANG
    lang = lang.strip()
    if not _LANG_PATTERN.match(lang):
        raise InvalidInputError(lang, reason="not a language tag")
    return lang


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class SubtitleStrategy(Protocol):
    """Anything that can turn resolved video data into subtitles."""

    name: str

    def extract(self, info: VideoInfo, lang: str = DEFAULT_LANG) -> list[Subtitle]:
        ...


class SubtitleService:
    """
    Orchestrates one extraction per call.

    Args:
        config:     Engine configuration.
        http:       Shared requests.Session for all upstream calls.
        rng:        Randomness source for visitor tokens (seed it in tests).
        strategies: Extraction strategies in priority order; defaults to
                    [TranscriptPanelStrategy, CaptionTrackStrategy].
    """

    def __init__(
        self,
        config: EngineConfig,
        http: requests.Session | None = None,
        rng: random.Random | None = None,
        strategies: list[SubtitleStrategy] | None = None,
    ) -> None:
        self.config = config
        self.http = http if http is not None else requests.Session()
        self.rng = rng
        self.client = InnerTubeClient(config, self.http)
        if strategies is None:
            strategies = [
                TranscriptPanelStrategy(self.client, config, rng),
                CaptionTrackStrategy(config, self.http),
            ]
        self.strategies = strategies

    def resolve(self, video_id: str, lang: str = DEFAULT_LANG) -> VideoInfo:
        """Fetch player (and, if needed, next) data.  Upstream errors propagate."""
        session = new_session(self.config, self.rng, hl=lang)
        return resolve_video_info(self.client, video_id, session)

    def subtitles_for(self, info: VideoInfo, lang: str = DEFAULT_LANG) -> list[Subtitle]:
        """Try each strategy in order; the first non-empty result wins."""
        for strategy in self.strategies:
            try:
                subtitles = strategy.extract(info, lang)
            except SubtitleError as exc:
                logger.warning(
                    "%s failed for %s: %s", strategy.name, info.video_id, exc.message,
                )
                continue
            if subtitles:
                logger.info(
                    "%s produced %d subtitles for %s",
                    strategy.name, len(subtitles), info.video_id,
                )
                return subtitles
            logger.debug("%s produced nothing for %s", strategy.name, info.video_id)
        return []

    def get_subtitles(self, video_id: str, lang: str | None = DEFAULT_LANG) -> list[Subtitle]:
        """
        Fetch subtitles for one video.

        Returns:
            Subtitles in source order; empty when the video has none.

        Raises:
            InvalidInputError:   Bad video id or language, before any request.
            TransportError:      The player endpoint could not be reached.
            UpstreamStatusError: The player endpoint answered non-2xx.
        """
        video_id = validate_video_id(video_id)
        lang = _normalize_lang(lang)
        return self.subtitles_for(self.resolve(video_id, lang), lang)

    def get_video_details(self, video_id: str, lang: str | None = DEFAULT_LANG) -> VideoDetails:
        """Fetch title, description and subtitles, sharing one player call."""
        video_id = validate_video_id(video_id)
        lang = _normalize_lang(lang)
        info = self.resolve(video_id, lang)
        return VideoDetails(
            title=video_title(info.player_data) or NO_TITLE,
            description=video_description(info.player_data) or NO_DESCRIPTION,
            subtitles=self.subtitles_for(info, lang),
        )


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------

def _service(config: EngineConfig | None) -> SubtitleService:
    return SubtitleService(config if config is not None else EngineConfig.from_env())


def get_subtitles(
    video_id: str,
    lang: str | None = DEFAULT_LANG,
    config: EngineConfig | None = None,
) -> list[Subtitle]:
    """Fetch subtitles with a one-off service (config from the environment by default)."""
    return _service(config).get_subtitles(video_id, lang)


def get_video_details(
    video_id: str,
    lang: str | None = DEFAULT_LANG,
    config: EngineConfig | None = None,
) -> VideoDetails:
    """Fetch video details with a one-off service (config from the environment by default)."""
    return _service(config).get_video_details(video_id, lang)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(subtitles: list[Subtitle]) -> str:
    """One subtitle per line, no timestamps."""
    return "\n".join(s.text for s in subtitles)


def format_plain(subtitles: list[Subtitle]) -> str:
    """All subtitle text as one whitespace-collapsed paragraph (what summarisers want)."""
    return subtitles_to_text(subtitles)


def format_json(subtitles: list[Subtitle], video_id: str) -> dict[str, Any]:
    """
    Build a JSON-serialisable dict.

    Returns:
        A dict with keys: video_id, subtitle_count, subtitles.
        Each subtitle has: start, dur, text.
    """
    return {
        "video_id": video_id,
        "subtitle_count": len(subtitles),
        "subtitles": [s.to_dict() for s in subtitles],
    }


# ---------------------------------------------------------------------------
# High-level convenience function
# ---------------------------------------------------------------------------

def extract(
    url_or_id: str,
    lang: str | None = DEFAULT_LANG,
    fmt: str = "text",
    *,
    config: EngineConfig | None = None,
    service: SubtitleService | None = None,
) -> str | dict[str, Any]:
    """
    One-call interface: parse URL → fetch subtitles → format output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        lang:      Preferred language tag.
        fmt:       "text" (one line per subtitle), "plain" (one paragraph)
                   or "json" (dict with timestamps).
        config:    Engine configuration; read from the environment when None.
        service:   An existing service to reuse instead of building one.

    Raises:
        ValueError:     If fmt is not "text", "plain" or "json".
        SubtitleError:  (or subclass) on a hard extraction failure.
    """
    if fmt not in ("text", "plain", "json"):
        raise ValueError(f"Unknown format {fmt!r}; expected 'text', 'plain', or 'json'")

    video_id = parse_video_id(url_or_id)
    service = service if service is not None else _service(config)
    subtitles = service.get_subtitles(video_id, lang)

    if fmt == "json":
        return format_json(subtitles, video_id)
    if fmt == "plain":
        return format_plain(subtitles)
    return format_text(subtitles)
