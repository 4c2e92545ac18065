from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from .constants import MIN_COMPRESSION_RUN

COMPRESSED_RE = re.compile(r"^(.+?)\((\d+)\)$")
COMPRESSION_MARK_RE = re.compile(r"\(\d+\)")


def split_compressed(symbol: str) -> Optional[Tuple[str, int]]:
    match = COMPRESSED_RE.match(symbol)
    if not match:
        return None
    return match.group(1), int(match.group(2))


def split_run(symbol: str) -> Tuple[str, int]:
    """Unwrap every trailing count mark: ``X(2)(3)`` is ``("X", 6)``."""
    base, count = symbol, 1
    parts = split_compressed(base)
    while parts is not None:
        base, run = parts
        count *= run
        parts = split_compressed(base)
    return base, count


def expanded_length(symbols: Iterable[str]) -> int:
    return sum(split_run(symbol)[1] for symbol in symbols)


def expand_compression(symbols: Iterable[str], limit: Optional[int] = None) -> List[str]:
    expanded: List[str] = []
    for symbol in symbols:
        base, count = split_run(symbol)
        if limit is not None:
            room = limit - len(expanded)
            if room <= 0:
                break
            count = min(count, room)
        expanded.extend([base] * count)
    return expanded


def compress_pattern(pattern: List[str], min_run: int = MIN_COMPRESSION_RUN) -> List[str]:
    compressed: List[str] = []
    i = 0
    while i < len(pattern):
        current = pattern[i]
        count = 1
        while i + count < len(pattern) and pattern[i + count] == current:
            count += 1
        if count >= min_run:
            compressed.append(f"{current}({count})")
        else:
            compressed.extend([current] * count)
        i += count
    return compressed


def format_run(symbol: str, count: int, min_run: int = MIN_COMPRESSION_RUN) -> str:
    if count >= min_run:
        return f"{symbol}({count})"
    return " ".join([symbol] * count)
