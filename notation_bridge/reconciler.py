from __future__ import annotations

from typing import List, Optional

from .compression import format_run
from .constants import REST_SYMBOL
from .document import Diagnostics


def reconcile_subdivisions(
    tokens: List[str],
    expected: int,
    bar: int,
    pitch: str,
    diagnostics: Diagnostics,
    count: Optional[int] = None,
) -> List[str]:
    # count is the full expanded length when tokens were cut short at expected
    if count is None:
        count = len(tokens)
    if count == expected:
        return list(tokens)

    prefix = f"Bar {bar} {pitch}"
    diagnostics.warn(f"{prefix}: Expected {expected} subdivisions (when expanded), got {count}")

    if count < expected:
        needed = expected - count
        diagnostics.fix(
            f"{prefix}: Added {needed} subdivisions ({format_run(REST_SYMBOL, needed)}) to reach {expected}"
        )
        return list(tokens) + [REST_SYMBOL] * needed

    excess = count - expected
    diagnostics.fix(f"{prefix}: Removed {excess} excess subdivisions")
    return list(tokens[:expected])
