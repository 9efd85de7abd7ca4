"""
models.py — Value types produced and consumed by the extraction engine.

All instances are request-scoped and immutable.  Upstream JSON is kept as
plain dicts (the internal API is undocumented and its shape varies), and is
only navigated with explicit presence checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NO_TITLE = "No title"
NO_DESCRIPTION = "No description"


@dataclass(frozen=True)
class Subtitle:
    """
    One timed line of transcript text.

    Attributes:
        start: Offset from the beginning of the video, decimal seconds as text.
        dur:   Display duration, decimal seconds as text.
        text:  Plain decoded text (no markup, no HTML entities).
    """
    start: str
    dur: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "dur": self.dur, "text": self.text}


@dataclass(frozen=True)
class VideoDetails:
    """Title, description and subtitles of one video."""
    title: str = NO_TITLE
    description: str = NO_DESCRIPTION
    subtitles: list[Subtitle] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "subtitles": [s.to_dict() for s in self.subtitles],
        }


@dataclass(frozen=True)
class VideoInfo:
    """
    Raw upstream data for one video, as returned by the resolver.

    Attributes:
        video_id:    The 11-character video identifier.
        player_data: The /player response.
        next_data:   The /next response, only fetched when the player
                     reported LOGIN_REQUIRED; None otherwise.
    """
    video_id: str
    player_data: dict[str, Any]
    next_data: dict[str, Any] | None = None


@dataclass(frozen=True)
class CaptionTrack:
    """
    A caption track listed in the player response.

    `variant` is the platform's language-variant id: ".en" for a manually
    authored English track, "a.en" for an auto-generated one.
    """
    base_url: str
    variant: str
    language_code: str = ""
    kind: str = ""

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> CaptionTrack | None:
        """Build a track from a raw `captionTracks[]` entry; None without a baseUrl."""
        base_url = raw.get("baseUrl")
        if not isinstance(base_url, str) or not base_url:
            return None

        language_code = raw.get("languageCode") or ""
        kind = raw.get("kind") or ""
        variant = raw.get("vssId")
        if not isinstance(variant, str) or not variant:
            # Older responses omit vssId; rebuild it the way the platform does.
            variant = ("a." if kind == "asr" else ".") + language_code

        return cls(
            base_url=base_url,
            variant=variant,
            language_code=language_code,
            kind=kind,
        )

    @property
    def is_generated(self) -> bool:
        return self.kind == "asr" or self.variant.startswith("a.")
