from __future__ import annotations

from typing import Any, Dict, List, Optional

from .compression import compress_pattern, expand_compression, expanded_length
from .constants import MIN_TEXT_LENGTH
from .document import Bar, Diagnostics, Document, PitchLine
from .grid import calculate_subdivisions, is_supported_time_signature
from .line_classifier import build_document
from .logger_config import logger
from .metadata import normalize_metadata
from .models import ValidationResult
from .reconciler import reconcile_subdivisions
from .symbols import validate_symbol
from .utils import summarize_text

TOO_SHORT_ERROR = "MIDI text too short or empty"


def fix_pitch_line(
    pitch_line: PitchLine,
    bar: Bar,
    expected: int,
    diagnostics: Diagnostics,
) -> Optional[str]:
    if not pitch_line.tokens:
        diagnostics.warn(f"Empty pattern for {pitch_line.pitch} in bar {bar.index}")
        return None

    expanded = expand_compression(pitch_line.tokens, limit=expected)
    reconciled = reconcile_subdivisions(
        expanded,
        expected,
        bar.index,
        pitch_line.pitch,
        diagnostics,
        count=expanded_length(pitch_line.tokens),
    )

    # one validation (and one warning) per distinct symbol in the line
    validated_by_symbol: Dict[str, str] = {}
    validated: List[str] = []
    for symbol in reconciled:
        if symbol not in validated_by_symbol:
            validated_by_symbol[symbol] = validate_symbol(symbol, bar.index, pitch_line.pitch, diagnostics)
        validated.append(validated_by_symbol[symbol])

    return f"{pitch_line.pitch}: {' '.join(compress_pattern(validated))}"


def assemble_document(document: Document, expected: int, diagnostics: Diagnostics) -> str:
    lines = list(document.header)
    for position, bar in enumerate(document.bars):
        if position == 0 or bar.separated:
            lines.append("")
        lines.append(f"Bar: {bar.index}")
        for pitch_line in bar.pitch_lines:
            fixed_line = fix_pitch_line(pitch_line, bar, expected, diagnostics)
            if fixed_line is not None:
                lines.append(fixed_line)
    return "\n".join(lines)


def run_correction_pass(text: str, diagnostics: Diagnostics) -> str:
    lines = text.splitlines()
    metadata, synthesized = normalize_metadata(lines, diagnostics)

    time_sig = metadata.effective_time_sig
    expected = calculate_subdivisions(time_sig)
    if not is_supported_time_signature(time_sig):
        diagnostics.warn(f"Unsupported time signature {time_sig}, using {expected} subdivisions per bar")

    document = build_document(lines, metadata, synthesized, diagnostics)
    midi = assemble_document(document, expected, diagnostics)

    logger.info(
        "validate_and_fix: time_sig=%s subdivisions=%d bars=%d pitch_lines=%d warnings=%d fixed=%d",
        time_sig,
        expected,
        len(document.bars),
        document.pitch_line_count,
        len(diagnostics.warnings),
        len(diagnostics.fixed),
    )
    return midi


def validate_and_fix(text: Any) -> ValidationResult:
    """Repair a notation document into canonical form.

    Never raises: short input and internal failures come back as
    ``success=False`` with the original text in ``midi``.
    """
    text = text if isinstance(text, str) else str(text or "")
    if len(text) < MIN_TEXT_LENGTH:
        logger.info("validate_and_fix: rejected input of %d chars", len(text))
        return ValidationResult(success=False, midi=text, errors=[TOO_SHORT_ERROR])

    diagnostics = Diagnostics()
    try:
        midi = run_correction_pass(text, diagnostics)
    except Exception as exc:
        logger.exception("validate_and_fix: processing failed for input %s", summarize_text(text))
        return ValidationResult(success=False, midi=text, errors=[str(exc) or type(exc).__name__])

    return ValidationResult(
        success=True,
        midi=midi,
        warnings=diagnostics.warnings,
        fixed=diagnostics.fixed,
    )
