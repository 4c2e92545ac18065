from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .constants import DEFAULT_KEY, DEFAULT_TEMPO, DEFAULT_TIME_SIG
from .document import Diagnostics, Metadata
from .models import MetadataInfo

FIELD_TEMPO = "tempo"
FIELD_TIME_SIG = "time_sig"
FIELD_KEY = "key"
FIELD_LEGATO = "legato"

# (field, line prefix, value pattern); prefixes are case-sensitive.
METADATA_FIELDS: Tuple[Tuple[str, str, re.Pattern], ...] = (
    (FIELD_TEMPO, "Tempo:", re.compile(r"^Tempo:\s*(\d+)")),
    (FIELD_TIME_SIG, "TimeSig:", re.compile(r"^TimeSig:\s*(\d+/\d+)")),
    (FIELD_KEY, "Key:", re.compile(r"^Key:\s*([A-Ga-g][#b]?)")),
    (FIELD_LEGATO, "Legato:", re.compile(r"^Legato:\s*(\S.*)$")),
)

FIELD_LABELS = {
    FIELD_TEMPO: "Tempo",
    FIELD_TIME_SIG: "TimeSig",
    FIELD_KEY: "Key",
    FIELD_LEGATO: "Legato",
}

# Synthesized in this order when missing; Legato is never synthesized.
REQUIRED_DEFAULTS: Tuple[Tuple[str, Any], ...] = (
    (FIELD_TEMPO, DEFAULT_TEMPO),
    (FIELD_TIME_SIG, DEFAULT_TIME_SIG),
    (FIELD_KEY, DEFAULT_KEY),
)


def match_metadata_field(line: str) -> Optional[str]:
    for name, prefix, _ in METADATA_FIELDS:
        if line.startswith(prefix):
            return name
    return None


def parse_metadata_value(name: str, line: str) -> Optional[Any]:
    for field_name, _, pattern in METADATA_FIELDS:
        if field_name != name:
            continue
        match = pattern.match(line)
        if not match:
            return None
        raw = match.group(1)
        if name == FIELD_TEMPO:
            tempo = int(raw)
            return tempo if tempo > 0 else None
        if name == FIELD_KEY:
            return raw[0].upper() + raw[1:]
        return raw.strip()
    return None


def parse_metadata_line(line: str) -> Tuple[Optional[str], Optional[Any]]:
    name = match_metadata_field(line)
    if name is None:
        return None, None
    return name, parse_metadata_value(name, line)


def collect_metadata(lines: Iterable[str]) -> Metadata:
    found: Dict[str, Any] = {}
    for raw_line in lines:
        name, value = parse_metadata_line(raw_line.strip())
        if name is None or value is None or name in found:
            continue
        found[name] = value
    return Metadata(
        tempo=found.get(FIELD_TEMPO),
        time_sig=found.get(FIELD_TIME_SIG),
        key=found.get(FIELD_KEY),
        legato=found.get(FIELD_LEGATO),
    )


def canonical_metadata_line(name: str, value: Any) -> str:
    return f"{FIELD_LABELS[name]}: {value}"


def synthesize_missing_metadata(metadata: Metadata, diagnostics: Diagnostics) -> List[str]:
    lines: List[str] = []
    for name, default in REQUIRED_DEFAULTS:
        if getattr(metadata, name) is not None:
            continue
        line = canonical_metadata_line(name, default)
        lines.append(line)
        diagnostics.fix(f"Added missing {line}")
    return lines


def normalize_metadata(lines: List[str], diagnostics: Diagnostics) -> Tuple[Metadata, List[str]]:
    """Collect the first recognized value per field and synthesize defaults for the gaps.

    Returns the collected metadata (defaults not filled in) and the synthesized
    header lines, in Tempo, TimeSig, Key order.
    """
    metadata = collect_metadata(lines)
    return metadata, synthesize_missing_metadata(metadata, diagnostics)


def extract_metadata(text: str) -> MetadataInfo:
    metadata = collect_metadata((text or "").splitlines())
    return MetadataInfo(tempo=metadata.tempo, time_sig=metadata.time_sig, key=metadata.key)
