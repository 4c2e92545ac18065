from __future__ import annotations

import re
from typing import List

from .compression import COMPRESSION_MARK_RE, expanded_length
from .constants import MIN_TEXT_LENGTH
from .line_classifier import PITCH_LINE_RE, split_pitch_line
from .logger_config import logger
from .metadata import extract_metadata
from .models import NotationStats, PrecheckResult, QuickValidation
from .text_utils import clean_response_text

TEMPO_LINE_RE = re.compile(r"^\s*Tempo:", re.MULTILINE)
TIME_SIG_LINE_RE = re.compile(r"^\s*TimeSig:", re.MULTILINE)
KEY_LINE_RE = re.compile(r"^\s*Key:", re.MULTILINE)
BAR_MARKER_RE = re.compile(r"^\s*Bar:", re.MULTILINE)
PITCH_HEADER_RE = re.compile(r"^\s*[A-G][#b]?-?\d+:", re.MULTILINE)

# Shapes a model response must not contain to be accepted as notation.
INVALID_RESPONSE_PATTERNS: List[re.Pattern] = [
    re.compile(r"V[0-9]:", re.IGNORECASE),
    re.compile(r"Voice[0-9]:", re.IGNORECASE),
    re.compile(r"Part[0-9]:", re.IGNORECASE),
    re.compile(r"Track[0-9]:", re.IGNORECASE),
    re.compile(r"\[.*\]"),
    re.compile(r"{.*}"),
    re.compile(r"<.*>"),
]


def quick_validate(text: str) -> QuickValidation:
    text = text or ""
    has_tempo = bool(TEMPO_LINE_RE.search(text))
    has_time_sig = bool(TIME_SIG_LINE_RE.search(text))
    has_key = bool(KEY_LINE_RE.search(text))
    has_bars = bool(BAR_MARKER_RE.search(text))
    has_notes = bool(PITCH_HEADER_RE.search(text))
    return QuickValidation(
        valid=has_tempo and has_time_sig and has_key and has_bars and has_notes,
        has_tempo=has_tempo,
        has_time_sig=has_time_sig,
        has_key=has_key,
        has_bars=has_bars,
        has_notes=has_notes,
    )


def count_bars(text: str) -> int:
    return len(BAR_MARKER_RE.findall(text or ""))


def count_voices(text: str) -> int:
    return len(PITCH_HEADER_RE.findall(text or ""))


def has_compression(text: str) -> bool:
    return bool(COMPRESSION_MARK_RE.search(text or ""))


def calculate_compression_ratio(text: str) -> float:
    """Percentage of expanded tokens saved by compression across all pitch lines."""
    literal = 0
    expanded = 0
    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not PITCH_LINE_RE.match(line):
            continue
        _, tokens = split_pitch_line(line)
        literal += len(tokens)
        expanded += expanded_length(tokens)
    if expanded == 0:
        return 0.0
    return round((1 - literal / expanded) * 100, 1)


def inspect_notation(text: str) -> NotationStats:
    return NotationStats(
        bars=count_bars(text),
        voices=count_voices(text),
        metadata=extract_metadata(text),
        has_compression=has_compression(text),
        compression_ratio=calculate_compression_ratio(text),
    )


def precheck_response(text: str) -> PrecheckResult:
    if not text or len(text) < MIN_TEXT_LENGTH:
        return PrecheckResult(valid=False, error="Response too short or empty")

    for pattern in INVALID_RESPONSE_PATTERNS:
        if pattern.search(text):
            logger.info("precheck_response: invalid pattern %s", pattern.pattern)
            return PrecheckResult(valid=False, error=f"Invalid format: contains {pattern.pattern}")

    presence = quick_validate(text)
    if not (presence.has_tempo and presence.has_time_sig and presence.has_bars and presence.has_notes):
        return PrecheckResult(valid=False, error="Missing required MIDI structure")

    return PrecheckResult(
        valid=True,
        cleaned_text=clean_response_text(text),
        bar_count=count_bars(text),
        voice_count=count_voices(text),
    )
