from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import DEFAULT_KEY, DEFAULT_TEMPO, DEFAULT_TIME_SIG


@dataclass
class Diagnostics:
    """Per-call warning and fix log; created inside each validation call, never shared."""

    warnings: List[str] = field(default_factory=list)
    fixed: List[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def fix(self, message: str) -> None:
        self.fixed.append(message)


@dataclass
class Metadata:
    tempo: Optional[int] = None
    time_sig: Optional[str] = None
    key: Optional[str] = None
    legato: Optional[str] = None

    @property
    def effective_tempo(self) -> int:
        return self.tempo if self.tempo is not None else DEFAULT_TEMPO

    @property
    def effective_time_sig(self) -> str:
        return self.time_sig or DEFAULT_TIME_SIG

    @property
    def effective_key(self) -> str:
        return self.key or DEFAULT_KEY


@dataclass
class PitchLine:
    pitch: str
    tokens: List[str]
    line_no: int = 0


@dataclass
class Bar:
    index: int
    pitch_lines: List[PitchLine] = field(default_factory=list)
    separated: bool = False


@dataclass
class Document:
    metadata: Metadata
    header: List[str] = field(default_factory=list)
    bars: List[Bar] = field(default_factory=list)

    @property
    def pitch_line_count(self) -> int:
        return sum(len(bar.pitch_lines) for bar in self.bars)
