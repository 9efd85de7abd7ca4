"""
captions.py — Fallback: subtitles from a raw caption track.

The player response lists caption tracks, each pointing at a timed-text
document.  One track is chosen by language, its document is downloaded and
the `<text start dur>` cues are pulled out with a regex.  Download failures
raise CaptionFetchError; the service turns those into "no subtitles".
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import CaptionFetchError, UpstreamShapeError
from yt_subtitles.innertube import dig
from yt_subtitles.models import CaptionTrack, Subtitle, VideoInfo
from yt_subtitles.text import clean_text

logger = logging.getLogger(__name__)

_TRACKS_PATH = ("captions", "playerCaptionsTracklistRenderer", "captionTracks")

# Flat format: no nested cues.  `dur` is occasionally absent on the last cue.
_CUE_PATTERN = re.compile(
    r'<text\s+start="(?P<start>[^"]*)"(?:\s+dur="(?P<dur>[^"]*)")?[^>]*>(?P<text>.*?)</text>',
    re.DOTALL,
)


def caption_tracks(player_data: dict[str, Any]) -> list[CaptionTrack]:
    """Return the usable caption tracks listed in a player response, in order."""
    try:
        raw_tracks = dig(player_data, *_TRACKS_PATH)
    except UpstreamShapeError:
        return []
    if not isinstance(raw_tracks, list):
        return []

    tracks = []
    for raw in raw_tracks:
        if isinstance(raw, dict):
            track = CaptionTrack.from_json(raw)
            if track is not None:
                tracks.append(track)
    return tracks


def _in_language(track: CaptionTrack, lang: str) -> bool:
    if track.language_code:
        return track.language_code == lang
    # Named tracks carry a suffix: ".en.nP7-2PuUl7o".
    return re.match(rf"a?\.{re.escape(lang)}(?:\.|$)", track.variant) is not None


def select_caption_track(tracks: list[CaptionTrack], lang: str = "en") -> CaptionTrack | None:
    """
    Pick a track for `lang`.

    Priority: manual track in `lang` (named ones included), then
    auto-generated in `lang`, then the first track listed.  None only when
    `tracks` is empty.
    """
    if not tracks:
        return None
    for generated in (False, True):
        for track in tracks:
            if track.is_generated == generated and _in_language(track, lang):
                return track
    return tracks[0]


def timedtext_url(base_url: str) -> str:
    """Drop the `fmt` hint so the plain timed-text XML is served."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "fmt"]
    return urlunsplit(parts._replace(query=urlencode(query)))


def _decimal_text(value: str | None) -> str | None:
    if value is None or value == "":
        return "0"
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return value


def parse_timed_text(document: str) -> list[Subtitle]:
    """Extract every start/dur/text cue from a timed-text document, in document order."""
    subtitles = []
    for match in _CUE_PATTERN.finditer(document):
        start = _decimal_text(match.group("start"))
        dur = _decimal_text(match.group("dur"))
        if start is None or dur is None:
            continue
        text = clean_text(match.group("text"))
        if not text:
            continue
        subtitles.append(Subtitle(start=start, dur=dur, text=text))
    return subtitles


class CaptionTrackStrategy:
    """Extract subtitles from the best-matching caption track."""

    name = "caption-track"

    def __init__(self, config: EngineConfig, http: requests.Session | None = None) -> None:
        self.config = config
        self.http = http if http is not None else requests.Session()

    def fetch_document(self, video_id: str, track: CaptionTrack) -> str:
        """
        Download the timed-text document for `track`.

        Raises:
            CaptionFetchError: Malformed track URL, network failure or non-2xx
                status.
        """
        try:
            url = timedtext_url(track.base_url)
        except ValueError as exc:
            raise CaptionFetchError(video_id, reason=f"bad track URL: {exc}") from exc
        headers = {
            "User-Agent": self.config.caption_user_agent,
            "Referer": f"{self.config.origin}/watch?v={video_id}",
            "Origin": self.config.origin,
        }
        logger.debug("GET caption track %s for %s", track.variant, video_id)
        try:
            response = self.http.get(url, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise CaptionFetchError(video_id, reason=str(exc)) from exc
        if not response.ok:
            raise CaptionFetchError(video_id, status=response.status_code)
        return response.text

    def extract(self, info: VideoInfo, lang: str = "en") -> list[Subtitle]:
        track = select_caption_track(caption_tracks(info.player_data), lang)
        if track is None:
            logger.debug("No caption tracks for %s", info.video_id)
            return []
        return parse_timed_text(self.fetch_document(info.video_id, track))
