"""
text.py — Text and timing helpers shared by both extraction paths.
"""

from __future__ import annotations

import html
import re
from decimal import Decimal
from typing import Iterable

from yt_subtitles.models import Subtitle

# A tag needs a name right after `<`, so "x < 5 and y > 3" is left alone.
# Also applied after decoding: caption XML often carries `&lt;i&gt;`.
_TAG_PATTERN = re.compile(r"</?[A-Za-z][^<>]*>")

_WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_text(raw: str) -> str:
    """
    Strip markup and decode HTML entities until nothing changes.

    Idempotent: cleaning already clean text returns it unchanged.

    >>> clean_text("a &amp; b <i>c</i>")
    'a & b c'
    """
    # Every changing pass makes the text shorter, so this terminates.
    text = raw
    while True:
        decoded = html.unescape(_TAG_PATTERN.sub("", text))
        if decoded == text:
            return text.strip()
        text = decoded


def ms_to_seconds(ms: int) -> str:
    """
    Render a millisecond count as exact decimal seconds.

    1500 → "1.5", 2000 → "2", 0 → "0".
    """
    return str(Decimal(int(ms)) / 1000)


def subtitles_to_text(subtitles: Iterable[Subtitle]) -> str:
    """Join subtitle texts into one space-separated, whitespace-collapsed string."""
    joined = " ".join(s.text.strip() for s in subtitles)
    return _WHITESPACE_PATTERN.sub(" ", joined).strip()
