"""
test_text.py — Tests for text cleanup, timing rendering and concatenation.
"""

from __future__ import annotations

import pytest

from yt_subtitles.models import Subtitle
from yt_subtitles.text import clean_text, ms_to_seconds, subtitles_to_text


class TestCleanText:

    def test_entities_decoded_and_tags_stripped(self) -> None:
        assert clean_text("a &amp; b <i>c</i>") == "a & b c"

    @pytest.mark.parametrize("raw", [
        "a &amp; b <i>c</i>",
        "it&amp;#39;s",
        "&lt;font color=&quot;#fff&quot;&gt;hi&lt;/font&gt;",
        "plain",
        "5 < 6",
        "if x &lt; 5 and y &gt; 3",
        "&amp;amp;amp;amp;lt;b&amp;amp;amp;amp;gt;",
    ])
    def test_idempotent(self, raw: str) -> None:
        once = clean_text(raw)
        assert clean_text(once) == once

    def test_double_escaped_entity(self) -> None:
        """Caption XML escapes entity ampersands a second time."""
        assert clean_text("it&amp;#39;s") == "it's"

    def test_entity_encoded_markup_removed(self) -> None:
        assert clean_text("&lt;font color=&quot;#fff&quot;&gt;hi&lt;/font&gt;") == "hi"

    def test_lone_angle_bracket_kept(self) -> None:
        assert clean_text("5 &lt; 6") == "5 < 6"

    def test_comparison_operators_kept(self) -> None:
        """Escaped `<` ... `>` around ordinary words is text, not a tag."""
        assert clean_text("if x &lt; 5 and y &gt; 3") == "if x < 5 and y > 3"

    def test_deeply_escaped_entity(self) -> None:
        assert clean_text("a &amp;amp;amp;amp;amp; b") == "a & b"

    def test_deeply_escaped_markup_reaches_fixed_point(self) -> None:
        raw = "&amp;amp;amp;amp;lt;b&amp;amp;amp;amp;gt;bold"
        once = clean_text(raw)
        assert once == "bold"
        assert clean_text(once) == once

    def test_trims(self) -> None:
        assert clean_text("  hello\n") == "hello"

    def test_empty(self) -> None:
        assert clean_text("<br/>") == ""


class TestMsToSeconds:

    @pytest.mark.parametrize("ms, expected", [
        (0, "0"),
        (1500, "1.5"),
        (2000, "2"),
        (1234, "1.234"),
        (10, "0.01"),
        ("62040", "62.04"),
    ])
    def test_render(self, ms, expected: str) -> None:
        assert ms_to_seconds(ms) == expected


class TestSubtitlesToText:

    def test_joins_and_collapses(self) -> None:
        subs = [
            Subtitle("0", "1", " Hello  there "),
            Subtitle("1", "1", "general\nKenobi"),
        ]
        assert subtitles_to_text(subs) == "Hello there general Kenobi"

    def test_empty(self) -> None:
        assert subtitles_to_text([]) == ""
