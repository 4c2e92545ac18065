from __future__ import annotations

import re
from typing import List, Optional, Set, Tuple

from .constants import CONTENT_PREVIEW_CHARS
from .document import Bar, Diagnostics, Document, Metadata, PitchLine
from .logger_config import logger
from .metadata import FIELD_LABELS, parse_metadata_line

STATE_METADATA = "metadata"
STATE_BODY = "body"

LINE_METADATA = "metadata"
LINE_BAR = "bar"
LINE_PITCH = "pitch"
LINE_VOICE_LABEL = "voice_label"
LINE_FORMATTING = "formatting"
LINE_OTHER = "other"

BAR_PREFIX = "Bar:"
BAR_RE = re.compile(r"^Bar:\s*(\d+)")
PITCH_LINE_RE = re.compile(r"^[A-G][#b]?-?\d+:")
VOICE_LABEL_RE = re.compile(r"^(V\d+|Voice\d+):", re.IGNORECASE)
FORMATTING_RE = re.compile(r"^[#\-=*_]")
CODE_FENCE = "```"


def classify_line(line: str) -> str:
    name, _ = parse_metadata_line(line)
    if name is not None:
        return LINE_METADATA
    if line.startswith(BAR_PREFIX):
        return LINE_BAR
    if PITCH_LINE_RE.match(line):
        return LINE_PITCH
    if VOICE_LABEL_RE.match(line):
        return LINE_VOICE_LABEL
    if FORMATTING_RE.match(line) or CODE_FENCE in line:
        return LINE_FORMATTING
    return LINE_OTHER


def split_pitch_line(line: str) -> Tuple[str, List[str]]:
    pitch, _, pattern = line.partition(":")
    return pitch.strip(), pattern.split()


class LineClassifier:
    """Two-region state machine turning raw lines into a Document.

    One instance serves exactly one validation call.
    """

    def __init__(self, metadata: Metadata, synthesized: List[str], diagnostics: Diagnostics) -> None:
        self.metadata = metadata
        self.synthesized = list(synthesized)
        self.diagnostics = diagnostics
        self.state = STATE_METADATA
        self.kept: List[str] = []
        self.hoisted: List[str] = []
        self.seen_fields: Set[str] = set()
        self.bars: List[Bar] = []
        self.current_bar: Optional[Bar] = None
        self.pending_blank = False

    def feed(self, line_no: int, raw_line: str) -> None:
        line = raw_line.strip()
        if not line:
            if self.state == STATE_BODY:
                self.pending_blank = True
            return

        kind = classify_line(line)
        if kind == LINE_METADATA:
            self._handle_metadata(line_no, line)
        elif kind == LINE_BAR:
            self._handle_bar(line_no, line)
        elif kind == LINE_PITCH and self.current_bar is not None:
            pitch, tokens = split_pitch_line(line)
            self.current_bar.pitch_lines.append(PitchLine(pitch=pitch, tokens=tokens, line_no=line_no))
        elif kind == LINE_VOICE_LABEL:
            self.diagnostics.warn(f"Removed invalid voice label at line {line_no}: {line}")
        elif kind == LINE_FORMATTING:
            self.diagnostics.warn(f"Removed formatting at line {line_no}")
        elif self.state == STATE_BODY:
            self.diagnostics.warn(
                f"Unrecognized content at line {line_no}: {line[:CONTENT_PREVIEW_CHARS]}"
            )
        else:
            logger.debug("Ignored preamble line %d: %s", line_no, line[:CONTENT_PREVIEW_CHARS])

    def _handle_metadata(self, line_no: int, line: str) -> None:
        name, value = parse_metadata_line(line)
        label = FIELD_LABELS[name]
        if self.state == STATE_BODY:
            # first recognized occurrence was counted as present by the normalizer
            if value is not None and name not in self.seen_fields:
                self.seen_fields.add(name)
                self.hoisted.append(line)
                self.diagnostics.fix(f"Moved {line} above the first bar")
            else:
                logger.debug("Dropped %s restated at line %d", label, line_no)
            return
        if value is None:
            self.diagnostics.warn(f"Invalid {label} at line {line_no}: {line}")
            return
        if name in self.seen_fields:
            self.diagnostics.warn(f"Ignored duplicate {label} at line {line_no}")
            return
        self.seen_fields.add(name)
        self.kept.append(line)

    def _handle_bar(self, line_no: int, line: str) -> None:
        self.state = STATE_BODY
        match = BAR_RE.match(line)
        if not match:
            self.diagnostics.warn(f"Invalid bar marker at line {line_no}: {line}")
            return
        self.current_bar = Bar(index=int(match.group(1)), separated=self.pending_blank)
        self.pending_blank = False
        self.bars.append(self.current_bar)

    def finish(self) -> Document:
        return Document(
            metadata=self.metadata,
            header=self.synthesized + self.kept + self.hoisted,
            bars=self.bars,
        )


def build_document(
    lines: List[str],
    metadata: Metadata,
    synthesized: List[str],
    diagnostics: Diagnostics,
) -> Document:
    classifier = LineClassifier(metadata, synthesized, diagnostics)
    for line_no, raw_line in enumerate(lines, start=1):
        classifier.feed(line_no, raw_line)
    return classifier.finish()
