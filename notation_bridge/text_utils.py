from __future__ import annotations

import re

GLUED_SUSTAIN_RE = re.compile(r"([Xx\d)])~")
PITCH_COLON_RE = re.compile(r"^(\s*[A-G][#b]?-?\d+):(?=\S)", re.MULTILINE)
WIDE_GAP_RE = re.compile(r" {5,}")
BEAT_GAP = "   "

CODE_FENCE = "```"
BOLD_MARKER = "**"
HEADING_MARKER = "# "


def quick_fix(text: str) -> str:
    """Repair spacing slips common in model output: ``X80~`` becomes ``X80 ~``."""
    if not text:
        return ""
    fixed = GLUED_SUSTAIN_RE.sub(r"\1 ~", text)
    fixed = PITCH_COLON_RE.sub(r"\1: ", fixed)
    return WIDE_GAP_RE.sub(BEAT_GAP, fixed)


def clean_response_text(text: str) -> str:
    cleaned = text.replace(CODE_FENCE, "").replace(BOLD_MARKER, "").replace(HEADING_MARKER, "")
    return cleaned.strip()
