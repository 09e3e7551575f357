"""
MappedField Entity

One schema slot of a target document populated from an extracted entity.

Lifecycle:
- Created at mapping time with ``is_accepted = False`` and ``mapped_value = None``
- Accepting copies the suggestion and raises confidence (capped)
- Editing stores a human value and lowers confidence (floored)
- Rejecting clears the value; confidence is left as it was
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from gazette.constants import (
    ACCEPT_CONFIDENCE_CAP,
    ACCEPT_CONFIDENCE_MULTIPLIER,
    EDIT_CONFIDENCE_FLOOR,
    EDIT_CONFIDENCE_MULTIPLIER,
)

from ..value_objects.confidence import Confidence
from ..value_objects.form_schema import FieldKind
from .extracted_entity import ExtractedEntity


class MappingActionType(str, Enum):
    ACCEPT = "accept"
    EDIT = "edit"
    REJECT = "reject"


@dataclass(frozen=True)
class MappingAction:
    """Audit entry for one human review step."""

    action: MappingActionType
    field_name: str
    previous_value: Optional[str]
    new_value: Optional[str]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "field_name": self.field_name,
            "previous_value": self.previous_value,
            "new_value": self.new_value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MappingAction:
        return cls(
            action=MappingActionType(data["action"]),
            field_name=data["field_name"],
            previous_value=data.get("previous_value"),
            new_value=data.get("new_value"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class MappedField:
    field_name: str
    label: str
    kind: FieldKind
    raw_value: Optional[str]
    suggested_value: Optional[str]
    confidence: Confidence
    mapped_value: Optional[str] = None
    is_edited: bool = False
    is_accepted: bool = False
    required: bool = False
    source_entity: Optional[ExtractedEntity] = None

    def __post_init__(self):
        if not isinstance(self.confidence, Confidence):
            self.confidence = Confidence.from_raw(self.confidence)
        if not isinstance(self.kind, FieldKind):
            self.kind = FieldKind(self.kind)

    @property
    def has_value(self) -> bool:
        return bool(self.mapped_value and str(self.mapped_value).strip())

    @property
    def source_page(self) -> Optional[int]:
        return self.source_entity.page_number if self.source_entity else None

    def accept(self) -> None:
        self.mapped_value = self.suggested_value
        self.is_accepted = True
        self.confidence = self.confidence.boosted(ACCEPT_CONFIDENCE_MULTIPLIER, ACCEPT_CONFIDENCE_CAP)

    def edit(self, new_value: str) -> None:
        self.mapped_value = new_value
        self.is_edited = True
        self.is_accepted = True
        self.confidence = self.confidence.damped(EDIT_CONFIDENCE_MULTIPLIER, EDIT_CONFIDENCE_FLOOR)

    def reject(self) -> None:
        self.mapped_value = None
        self.is_accepted = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field_name": self.field_name,
            "label": self.label,
            "kind": self.kind.value,
            "raw_value": self.raw_value,
            "suggested_value": self.suggested_value,
            "mapped_value": self.mapped_value,
            "confidence": self.confidence.value,
            "is_edited": self.is_edited,
            "is_accepted": self.is_accepted,
            "required": self.required,
            "source_entity": self.source_entity.to_dict() if self.source_entity else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MappedField:
        source = data.get("source_entity")
        return cls(
            field_name=data["field_name"],
            label=data.get("label", data["field_name"]),
            kind=FieldKind(data.get("kind", FieldKind.TEXT.value)),
            raw_value=data.get("raw_value"),
            suggested_value=data.get("suggested_value"),
            confidence=Confidence.from_raw(data.get("confidence", 0.0)),
            mapped_value=data.get("mapped_value"),
            is_edited=bool(data.get("is_edited", False)),
            is_accepted=bool(data.get("is_accepted", False)),
            required=bool(data.get("required", False)),
            source_entity=ExtractedEntity.from_dict(source) if source else None,
        )
