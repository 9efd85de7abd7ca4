"""
session.py — Per-extraction session context for internal API calls.

Every extraction call gets its own visitor token and request context; they
are never persisted or shared between calls.
"""

from __future__ import annotations

import copy
import random
import string
from dataclasses import dataclass
from typing import Any

from yt_subtitles.config import EngineConfig

# 64 symbols: 11 draws give ~66 bits, plenty to avoid collisions.
VISITOR_ALPHABET = string.ascii_letters + string.digits + "-_"
VISITOR_TOKEN_LENGTH = 11


@dataclass(frozen=True)
class SessionContext:
    """
    Visitor token plus the `context` object sent with every internal call.

    Use payload() to get the context; it is a fresh copy each time.
    """
    visitor_data: str
    context: dict[str, Any]

    def payload(self) -> dict[str, Any]:
        return copy.deepcopy(self.context)


def new_visitor_token(rng: random.Random | None = None) -> str:
    """Draw an 11-symbol visitor token.  Pass a seeded Random for repeatable output."""
    source = rng if rng is not None else random
    return "".join(source.choice(VISITOR_ALPHABET) for _ in range(VISITOR_TOKEN_LENGTH))


def new_session(
    config: EngineConfig,
    rng: random.Random | None = None,
    hl: str = "en",
    gl: str = "US",
) -> SessionContext:
    """
    Create a fresh SessionContext.

    Args:
        config: Supplies the client name and version.
        rng:    Randomness source for the visitor token; the module-level
                generator is used when None.
        hl:     Interface language for the context.
        gl:     Interface region for the context.
    """
    visitor_data = new_visitor_token(rng)
    context = {
        "client": {
            "hl": hl,
            "gl": gl,
            "clientName": config.client_name,
            "clientVersion": config.client_version,
            "visitorData": visitor_data,
        },
        "user": {
            "enableSafetyMode": False,
            "lockedSafetyMode": False,
        },
        "request": {
            "useSsl": True,
            "internalExperimentFlags": [],
            "consistencyTokenJars": [],
        },
    }
    return SessionContext(visitor_data=visitor_data, context=context)
