"""Text and confidence returned by one OCR call on one region."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .confidence import Confidence


@dataclass(frozen=True)
class OcrResult:
    text: str
    confidence: Confidence

    def __post_init__(self):
        if self.text is None:
            object.__setattr__(self, 'text', "")
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, 'confidence', Confidence.from_raw(self.confidence))

    @classmethod
    def create(cls, text: str | None, confidence: Any) -> OcrResult:
        return cls(text=(text or "").strip(), confidence=Confidence.from_raw(confidence))

    @classmethod
    def empty(cls) -> OcrResult:
        return cls(text="", confidence=Confidence(0.0))
