"""TextZone Entity - one readable column of a journal page."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ..value_objects.bounding_box import BoundingBox
from ..value_objects.confidence import Confidence
from ..value_objects.language import Language


@dataclass(frozen=True)
class TextZone:
    bounding_box: BoundingBox
    column_index: int
    text: Optional[str] = None
    confidence: Confidence = Confidence(0.0)
    language: Optional[Language] = None

    def __post_init__(self):
        if self.column_index < 0:
            raise ValueError("Column index must be non-negative")
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, 'confidence', Confidence.from_raw(self.confidence))

    def with_text(self, text: str, confidence: float, language: Language | None = None) -> TextZone:
        return replace(self, text=text, confidence=Confidence(confidence), language=language)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bounding_box": self.bounding_box.to_dict(),
            "column_index": self.column_index,
            "text": self.text,
            "confidence": self.confidence.value,
            "language": self.language.value if self.language else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TextZone:
        language = data.get("language")
        return cls(
            bounding_box=BoundingBox.from_dict(data.get("bounding_box")),
            column_index=data.get("column_index", 0),
            text=data.get("text"),
            confidence=Confidence.from_raw(data.get("confidence", 0.0)),
            language=Language(language) if language else None,
        )
