from __future__ import annotations

from typing import Optional, Tuple

from .constants import DEFAULT_SUBDIVISIONS, STEPS_PER_WHOLE


def parse_time_signature(time_sig: Optional[str]) -> Optional[Tuple[int, int]]:
    if not time_sig:
        return None
    try:
        parts = time_sig.strip().split("/")
        num = int(parts[0])
        denom = int(parts[1])
    except (ValueError, IndexError):
        return None
    if len(parts) != 2:
        return None
    return num, denom


def _grid_size(num: int, denom: int) -> Optional[int]:
    if num <= 0 or denom <= 0:
        return None
    steps = num * STEPS_PER_WHOLE
    if steps % denom:
        return None
    return steps // denom


def is_supported_time_signature(time_sig: Optional[str]) -> bool:
    parsed = parse_time_signature(time_sig)
    if parsed is None:
        return False
    return _grid_size(*parsed) is not None


def calculate_subdivisions(time_sig: Optional[str]) -> int:
    """Token slots per bar: numerator * (16 / denominator), 16 when unusable.

    12/8 gives 24; compound meters are not special-cased.
    """
    parsed = parse_time_signature(time_sig)
    if parsed is None:
        return DEFAULT_SUBDIVISIONS
    size = _grid_size(*parsed)
    return size if size is not None else DEFAULT_SUBDIVISIONS
