from __future__ import annotations

import time


def default_conversation_title(prefix: str = "Chat", *, now: float | None = None) -> str:
    """Return a short time-derived title; collisions are tolerated."""

    millis = int((time.time() if now is None else now) * 1000)
    return f"{prefix} #{millis % 10000}"
