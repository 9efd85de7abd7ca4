"""
cli.py — Command-line interface for yt-subtitles.

Provides the `yt-subtitles` command group (registered as a console script
in pyproject.toml):

    get       Fetch subtitles for a video.
    details   Fetch title, description and subtitles as JSON.

Usage examples:
    yt-subtitles get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    yt-subtitles get dQw4w9WgXcQ --lang de --format json
    yt-subtitles details https://youtu.be/dQw4w9WgXcQ -o details.json

The internal-API key is read from YOUTUBE_API (environment or `.env`).
"""

from __future__ import annotations

import json
import logging
import sys
from typing import NoReturn

import click

from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import SubtitleError
from yt_subtitles.extractor import (
    SubtitleService,
    format_json,
    format_plain,
    format_text,
    parse_video_id,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_service() -> SubtitleService:
    return SubtitleService(EngineConfig.from_env())


def _write(text: str, output: str | None) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Written to {output}", err=True)
    else:
        click.echo(text)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
def main() -> None:
    """
    YouTube subtitle extractor — fetch timed subtitles without the public API.
    """


@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--lang", "-l",
    default="en",
    show_default=True,
    help="Preferred subtitle language.",
)
@click.option(
    "--format", "-f",
    "fmt",
    type=click.Choice(["text", "plain", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="One line per subtitle, one plain paragraph, or JSON with timestamps.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write output to a file instead of stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log upstream calls to stderr.")
def get(video: str, lang: str, fmt: str, output: str | None, verbose: bool) -> None:
    """
    Fetch subtitles for a video.

    VIDEO can be a full YouTube URL or an 11-character video ID.
    Exits with status 1 when the video has no subtitles.
    """
    _configure_logging(verbose)
    fmt = fmt.lower()

    try:
        video_id = parse_video_id(video)
        subtitles = _build_service().get_subtitles(video_id, lang)
    except SubtitleError as exc:
        _fail(exc.message)

    if not subtitles:
        _fail("No subtitles found")

    if fmt == "json":
        text = json.dumps(format_json(subtitles, video_id), indent=2, ensure_ascii=False)
    elif fmt == "plain":
        text = format_plain(subtitles)
    else:
        text = format_text(subtitles)
    _write(text, output)


@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--lang", "-l",
    default="en",
    show_default=True,
    help="Preferred subtitle language.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write output to a file instead of stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log upstream calls to stderr.")
def details(video: str, lang: str, output: str | None, verbose: bool) -> None:
    """
    Fetch title, description and subtitles of a video as JSON.
    """
    _configure_logging(verbose)

    try:
        video_id = parse_video_id(video)
        result = _build_service().get_video_details(video_id, lang)
    except SubtitleError as exc:
        _fail(exc.message)

    payload = {"video_id": video_id, **result.to_dict()}
    _write(json.dumps(payload, indent=2, ensure_ascii=False), output)
