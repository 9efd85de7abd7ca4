"""
resolver.py — Fetch the player (and sometimes "next") data for a video.

Failures here mean basic video information is unavailable, so every client
error propagates unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

from yt_subtitles.innertube import InnerTubeClient
from yt_subtitles.models import VideoInfo
from yt_subtitles.session import SessionContext

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "LOGIN_REQUIRED"

# Mimic an embedded, non-autoplaying web player.
_PLAYBACK_CONTEXT = {
    "contentPlaybackContext": {
        "vis": 0,
        "splay": False,
        "autoCaptionsDefaultOn": False,
        "autonavState": "STATE_NONE",
        "html5Preference": "HTML5_PREF_WANTS",
        "lactMilliseconds": "-1",
    },
}


def resolve_video_info(
    client: InnerTubeClient,
    video_id: str,
    session: SessionContext,
) -> VideoInfo:
    """
    Call /player for `video_id`, and /next when the player asks for a login.

    Raises:
        TransportError, UpstreamStatusError: from the client, unchanged.
    """
    player_data = client.call(
        "player",
        {
            "videoId": video_id,
            "playbackContext": _PLAYBACK_CONTEXT,
            "racyCheckOk": True,
            "contentCheckOk": True,
        },
        session,
    )

    next_data = None
    if playability_status(player_data) == LOGIN_REQUIRED:
        logger.debug("Player reports %s for %s; fetching next data", LOGIN_REQUIRED, video_id)
        next_data = client.call("next", {"videoId": video_id}, session)

    return VideoInfo(video_id=video_id, player_data=player_data, next_data=next_data)


def playability_status(player_data: dict[str, Any]) -> str | None:
    status = player_data.get("playabilityStatus")
    if not isinstance(status, dict):
        return None
    value = status.get("status")
    return value if isinstance(value, str) else None


def _video_details_field(player_data: dict[str, Any], key: str) -> str | None:
    details = player_data.get("videoDetails")
    if not isinstance(details, dict):
        return None
    value = details.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def video_title(player_data: dict[str, Any]) -> str | None:
    return _video_details_field(player_data, "title")


def video_description(player_data: dict[str, Any]) -> str | None:
    return _video_details_field(player_data, "shortDescription")
