from __future__ import annotations

from .constants import LOG_PREVIEW_CHARS


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def summarize_text(text: str, limit: int = LOG_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "...(truncated)"
