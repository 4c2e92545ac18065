from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    success: bool
    midi: str
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    fixed: List[str] = Field(default_factory=list)


class QuickValidation(BaseModel):
    valid: bool
    has_tempo: bool
    has_time_sig: bool
    has_key: bool
    has_bars: bool
    has_notes: bool


class MetadataInfo(BaseModel):
    tempo: Optional[int] = None
    time_sig: Optional[str] = None
    key: Optional[str] = None


class PrecheckResult(BaseModel):
    valid: bool
    error: Optional[str] = None
    cleaned_text: str = ""
    bar_count: int = 0
    voice_count: int = 0


class NotationStats(BaseModel):
    bars: int
    voices: int
    metadata: MetadataInfo
    has_compression: bool
    compression_ratio: float = Field(description="Percentage of tokens saved by run-length compression")


class TextRequest(BaseModel):
    text: str = ""


class TextResponse(BaseModel):
    text: str
