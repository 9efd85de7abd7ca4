"""
api.py — FastAPI REST API for yt-subtitles.

Thin HTTP surface over the extraction engine.  It adds no extraction logic:
it parses links, calls the SubtitleService, and maps outcomes to responses.

Endpoints:
    GET /subtitles?link=<url>       — Subtitles (and plain text) for a video link.
    GET /subtitles/{video_id}       — Subtitles for a bare video ID.
    GET /details/{video_id}         — Title, description and subtitles.
    GET /health                     — Simple health-check for load balancers / monitoring.

Run with:
    uvicorn yt_subtitles.api:app

Hard errors (SubtitleError) are converted to JSON error responses by one
global handler using the status stored on the exception; an empty subtitle
list is answered with 404 "No subtitles found".
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from yt_subtitles.config import EngineConfig
from yt_subtitles.errors import InvalidInputError, SubtitleError
from yt_subtitles.extractor import SubtitleService, parse_video_id
from yt_subtitles.text import subtitles_to_text

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="YouTube Subtitle API",
    description="Extract timed YouTube subtitles through the platform's internal API, "
                "falling back from the transcript panel to raw caption tracks.",
    version="0.1.0",
)


@lru_cache(maxsize=1)
def get_service() -> SubtitleService:
    """One service per process; configuration is read once, on first use."""
    return SubtitleService(EngineConfig.from_env())


def _no_subtitles() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "No subtitles found"})


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(SubtitleError)
async def subtitle_error_handler(request: Request, exc: SubtitleError) -> JSONResponse:
    """Translate any SubtitleError (or subclass) into an HTTP error response."""
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.message},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

def video_id_from_link(
    link: str | None = Query(default=None, description="A YouTube video URL."),
) -> str:
    """
    Turn the `link` query parameter into a video ID.

    Declared ahead of the service dependency, so a bad request is answered
    with 400 even when the engine is not configured.
    """
    if not link:
        raise SubtitleError("YouTube link is required", http_status=400)
    try:
        return parse_video_id(link)
    except InvalidInputError as exc:
        raise SubtitleError("Invalid YouTube link", http_status=400) from exc


# Plain `def` endpoints: the engine does blocking I/O, so FastAPI runs these
# in its threadpool.
@app.get("/subtitles")
def subtitles_by_link(
    video_id: str = Depends(video_id_from_link),
    lang: str = Query(default="en", description="Preferred subtitle language."),
    service: SubtitleService = Depends(get_service),
) -> JSONResponse:
    """
    Fetch subtitles for a YouTube link.

    Returns `videoId`, the `subtitles` list (each with `start`, `dur`,
    `text`) and `text`, all subtitle text joined into one paragraph.
    """
    subtitles = service.get_subtitles(video_id, lang)
    if not subtitles:
        return _no_subtitles()

    return JSONResponse(content={
        "videoId": video_id,
        "subtitles": [s.to_dict() for s in subtitles],
        "text": subtitles_to_text(subtitles),
    })


@app.get("/subtitles/{video_id}")
def subtitles_by_id(
    video_id: str,
    lang: str = Query(default="en", description="Preferred subtitle language."),
    service: SubtitleService = Depends(get_service),
) -> JSONResponse:
    """Fetch subtitles for an 11-character video ID."""
    subtitles = service.get_subtitles(video_id, lang)
    if not subtitles:
        return _no_subtitles()
    return JSONResponse(content={
        "videoId": video_id,
        "subtitles": [s.to_dict() for s in subtitles],
    })


@app.get("/details/{video_id}")
def details_by_id(
    video_id: str,
    lang: str = Query(default="en", description="Preferred subtitle language."),
    service: SubtitleService = Depends(get_service),
) -> JSONResponse:
    """
    Fetch title, description and subtitles for a video.

    Missing title/description fall back to "No title" / "No description";
    an empty subtitle list is a normal 200 response here.
    """
    result = service.get_video_details(video_id, lang)
    return JSONResponse(content={"videoId": video_id, **result.to_dict()})


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Returns HTTP 200 with {"status": "ok"}."""
    return {"status": "ok"}
