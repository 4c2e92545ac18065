from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from .constants import (
    NOTE_SYMBOL,
    PERCENT_MAX,
    PERCENT_MIN,
    REST_SYMBOL,
    SUSTAIN_SYMBOL,
    VELOCITY_MAX,
    VELOCITY_MIN,
)
from .document import Diagnostics
from .utils import clamp

SUSTAIN_RE = re.compile(r"^~(\d+)?$")
NOTE_ON_RE = re.compile(
    r"^X(?P<velocity>\d+)?"
    r"(?:X?R(?P<right>\d+)"
    r"|X?L(?P<left>\d+)"
    r"|X?O(?P<offset>\d+)XE(?P<length>\d+)"
    r"|X?E(?P<duration>\d+))?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Rest:
    pass


@dataclass(frozen=True)
class Sustain:
    cutoff: Optional[int] = None


@dataclass(frozen=True)
class RightOffset:
    value: int


@dataclass(frozen=True)
class LeftOffset:
    value: int


@dataclass(frozen=True)
class Segment:
    offset: int
    duration: int


@dataclass(frozen=True)
class Duration:
    value: int


Modifier = Union[RightOffset, LeftOffset, Segment, Duration]


@dataclass(frozen=True)
class NoteOn:
    velocity: Optional[int] = None
    modifier: Optional[Modifier] = None


@dataclass(frozen=True)
class UnknownSymbol:
    text: str


Token = Union[Rest, Sustain, NoteOn, UnknownSymbol]


def _parse_modifier(match: re.Match) -> Optional[Modifier]:
    if match.group("right") is not None:
        return RightOffset(int(match.group("right")))
    if match.group("left") is not None:
        return LeftOffset(int(match.group("left")))
    if match.group("offset") is not None:
        return Segment(int(match.group("offset")), int(match.group("length")))
    if match.group("duration") is not None:
        return Duration(int(match.group("duration")))
    return None


def parse_symbol(symbol: str) -> Token:
    text = symbol.strip()
    if text == REST_SYMBOL:
        return Rest()
    sustain = SUSTAIN_RE.match(text)
    if sustain:
        cutoff = sustain.group(1)
        return Sustain(int(cutoff) if cutoff is not None else None)
    note = NOTE_ON_RE.match(text)
    if note:
        velocity = note.group("velocity")
        return NoteOn(
            velocity=int(velocity) if velocity is not None else None,
            modifier=_parse_modifier(note),
        )
    return UnknownSymbol(symbol)


def _render_modifier(modifier: Modifier) -> str:
    if isinstance(modifier, RightOffset):
        return f"R{modifier.value}"
    if isinstance(modifier, LeftOffset):
        return f"L{modifier.value}"
    if isinstance(modifier, Segment):
        return f"O{modifier.offset}XE{modifier.duration}"
    return f"E{modifier.value}"


def render_symbol(token: Token) -> str:
    if isinstance(token, Rest):
        return REST_SYMBOL
    if isinstance(token, Sustain):
        if token.cutoff is None:
            return SUSTAIN_SYMBOL
        return f"{SUSTAIN_SYMBOL}{token.cutoff}"
    if isinstance(token, NoteOn):
        rendered = NOTE_SYMBOL
        if token.velocity is not None:
            rendered += str(token.velocity)
        if token.modifier is not None:
            if token.velocity is not None:
                rendered += NOTE_SYMBOL
            rendered += _render_modifier(token.modifier)
        return rendered
    return token.text


def _clamp_field(
    value: int,
    low: int,
    high: int,
    label: str,
    prefix: str,
    diagnostics: Diagnostics,
) -> int:
    if low <= value <= high:
        return value
    diagnostics.warn(f"{prefix}: {label} {value} out of range, clamping to {low}-{high}")
    return clamp(value, low, high)


def _clamp_percent(value: int, label: str, prefix: str, diagnostics: Diagnostics) -> int:
    return _clamp_field(value, PERCENT_MIN, PERCENT_MAX, label, prefix, diagnostics)


def _clamp_modifier(modifier: Modifier, prefix: str, diagnostics: Diagnostics) -> Modifier:
    if isinstance(modifier, RightOffset):
        return RightOffset(_clamp_percent(modifier.value, "XR offset", prefix, diagnostics))
    if isinstance(modifier, LeftOffset):
        return LeftOffset(_clamp_percent(modifier.value, "XL offset", prefix, diagnostics))
    if isinstance(modifier, Segment):
        offset = _clamp_percent(modifier.offset, "XO offset", prefix, diagnostics)
        duration = _clamp_percent(modifier.duration, "XE duration", prefix, diagnostics)
        if offset + duration > PERCENT_MAX:
            diagnostics.warn(f"{prefix}: XO{offset}XE{duration} exceeds 100%, adjusting")
            duration = PERCENT_MAX - offset
        return Segment(offset, duration)
    return Duration(_clamp_percent(modifier.value, "Duration", prefix, diagnostics))


def clamp_token(token: Token, prefix: str, diagnostics: Diagnostics) -> Token:
    if isinstance(token, Sustain):
        if token.cutoff is None:
            return token
        return Sustain(_clamp_percent(token.cutoff, "Sustain cutoff", prefix, diagnostics))
    if isinstance(token, NoteOn):
        velocity = token.velocity
        if velocity is not None:
            velocity = _clamp_field(velocity, VELOCITY_MIN, VELOCITY_MAX, "Velocity", prefix, diagnostics)
        modifier = token.modifier
        if modifier is not None:
            modifier = _clamp_modifier(modifier, prefix, diagnostics)
        return NoteOn(velocity=velocity, modifier=modifier)
    return token


def validate_symbol(symbol: str, bar: int, pitch: str, diagnostics: Diagnostics) -> str:
    """Parse one expanded token, clamp its numeric fields and render it canonically.

    Unknown symbols are returned untouched with a warning.
    """
    prefix = f"Bar {bar} {pitch}"
    token = parse_symbol(symbol)
    if isinstance(token, UnknownSymbol):
        diagnostics.warn(f"{prefix}: Unrecognized symbol {symbol}")
        return symbol
    return render_symbol(clamp_token(token, prefix, diagnostics))
