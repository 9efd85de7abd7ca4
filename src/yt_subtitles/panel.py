"""
panel.py — Subtitles from the searchable-transcript engagement panel.

This is the preferred source: the "next" response of some videos carries an
engagement panel with a transcript widget.  Its continuation token is traded
for the full segment list via the get_transcript endpoint.

Flow:
    next_data.engagementPanels[]  → panel with the transcript identifier
    → continuation params token   → POST get_transcript
    → actions[0]...initialSegments → Subtitle per segment

Every missing link along the way means "no transcript here" and yields an
empty list; only programming errors escape.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import TransportError, UpstreamShapeError, UpstreamStatusError
from yt_subtitles.innertube import InnerTubeClient, dig
from yt_subtitles.models import Subtitle, VideoInfo
from yt_subtitles.session import new_session
from yt_subtitles.text import clean_text, ms_to_seconds

logger = logging.getLogger(__name__)

TRANSCRIPT_PANEL_ID = "engagement-panel-searchable-transcript"

_PARAMS_PATH = (
    "content",
    "continuationItemRenderer",
    "continuationEndpoint",
    "getTranscriptEndpoint",
    "params",
)

_SEGMENTS_PATH = (
    "actions", 0,
    "updateEngagementPanelAction",
    "content",
    "transcriptRenderer",
    "content",
    "transcriptSearchPanelRenderer",
    "body",
    "transcriptSegmentListRenderer",
    "initialSegments",
)


# ---------------------------------------------------------------------------
# Response navigation
# ---------------------------------------------------------------------------

def find_transcript_params(next_data: dict[str, Any]) -> str:
    """
    Return the get_transcript params token from a "next" response.

    Raises:
        UpstreamShapeError: No transcript panel, or the panel has no token.
    """
    panels = dig(next_data, "engagementPanels")
    if not isinstance(panels, list):
        raise UpstreamShapeError("engagementPanels")

    for item in panels:
        if not isinstance(item, dict):
            continue
        renderer = item.get("engagementPanelSectionListRenderer")
        if not isinstance(renderer, dict):
            continue
        if renderer.get("panelIdentifier") != TRANSCRIPT_PANEL_ID:
            continue
        token = dig(renderer, *_PARAMS_PATH)
        if not isinstance(token, str) or not token:
            raise UpstreamShapeError("getTranscriptEndpoint.params")
        return token

    raise UpstreamShapeError(f"engagement panel {TRANSCRIPT_PANEL_ID!r}")


def _segment_text(snippet: Any) -> str | None:
    if not isinstance(snippet, dict):
        return None
    simple = snippet.get("simpleText")
    if isinstance(simple, str):
        return simple
    runs = snippet.get("runs")
    if isinstance(runs, list):
        parts = [run["text"] for run in runs if isinstance(run, dict) and isinstance(run.get("text"), str)]
        if parts:
            return "".join(parts)
    return None


def segment_to_subtitle(segment: Any) -> Subtitle | None:
    """
    Convert one `initialSegments[]` entry; None when it carries no usable text.

    Section headers and other non-segment renderers are skipped.
    """
    if not isinstance(segment, dict):
        return None
    renderer = segment.get("transcriptSegmentRenderer")
    if not isinstance(renderer, dict):
        return None

    raw_text = _segment_text(renderer.get("snippet"))
    if raw_text is None:
        return None
    text = clean_text(raw_text)
    if not text:
        return None

    try:
        start_ms = max(int(renderer.get("startMs")), 0)
        end_ms = int(renderer.get("endMs"))
    except (TypeError, ValueError):
        return None

    return Subtitle(
        start=ms_to_seconds(start_ms),
        dur=ms_to_seconds(max(end_ms - start_ms, 0)),
        text=text,
    )


def parse_transcript_segments(response: dict[str, Any]) -> list[Subtitle]:
    """
    Flatten a get_transcript response into subtitles, in source order.

    Raises:
        UpstreamShapeError: The segment list is missing.
    """
    segments = dig(response, *_SEGMENTS_PATH)
    if not isinstance(segments, list):
        raise UpstreamShapeError("initialSegments")

    subtitles = []
    for segment in segments:
        subtitle = segment_to_subtitle(segment)
        if subtitle is not None:
            subtitles.append(subtitle)
    return subtitles


# ---------------------------------------------------------------------------
# Strategy
# ---------------------------------------------------------------------------

class TranscriptPanelStrategy:
    """Extract subtitles through the transcript engagement panel."""

    name = "transcript-panel"

    def __init__(
        self,
        client: InnerTubeClient,
        config: EngineConfig,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client
        self.config = config
        self.rng = rng

    def extract(self, info: VideoInfo, lang: str = "en") -> list[Subtitle]:
        if info.next_data is None:
            return []

        try:
            params = find_transcript_params(info.next_data)
        except UpstreamShapeError as exc:
            logger.debug("No transcript panel for %s: %s", info.video_id, exc.message)
            return []

        session = new_session(self.config, self.rng, hl=lang)
        try:
            response = self.client.call("get_transcript", {"params": params}, session)
        except (TransportError, UpstreamStatusError) as exc:
            logger.warning("Transcript fetch failed for %s: %s", info.video_id, exc.message)
            return []

        try:
            return parse_transcript_segments(response)
        except UpstreamShapeError as exc:
            logger.debug("Transcript response for %s is unusable: %s", info.video_id, exc.message)
            return []
