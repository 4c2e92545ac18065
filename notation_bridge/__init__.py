from __future__ import annotations

from .compression import compress_pattern, expand_compression
from .grid import calculate_subdivisions
from .inspection import (
    calculate_compression_ratio,
    count_bars,
    count_voices,
    has_compression,
    inspect_notation,
    precheck_response,
    quick_validate,
)
from .metadata import extract_metadata
from .models import ValidationResult
from .text_utils import quick_fix
from .validator import validate_and_fix

__version__ = "0.1.0"

__all__ = [
    "ValidationResult",
    "calculate_compression_ratio",
    "calculate_subdivisions",
    "compress_pattern",
    "count_bars",
    "count_voices",
    "expand_compression",
    "extract_metadata",
    "has_compression",
    "inspect_notation",
    "precheck_response",
    "quick_fix",
    "quick_validate",
    "validate_and_fix",
]
