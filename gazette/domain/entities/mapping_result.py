"""
MappingResult Entity

Fields of one target form populated from extracted entities, plus the human
review history. Mutations are serialized through an internal lock because the
aggregate confidence is recomputed from the whole field list after each one.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gazette.domain.exceptions import EntityNotFoundError

from ..value_objects.confidence import Confidence
from ..value_objects.form_schema import FormType
from .mapped_field import MappedField, MappingAction, MappingActionType


@dataclass
class MappingResult:
    form_type: FormType
    mapped_fields: List[MappedField]
    unmapped_fields: List[str]
    total_fields: int
    processing_ms: float = 0.0
    entities_used: int = 0
    actions: List[MappingAction] = field(default_factory=list)
    mapped_count: int = field(init=False, default=0)
    overall_confidence: Confidence = field(init=False, default=Confidence(0.0))
    _lock: threading.Lock = field(init=False, repr=False, compare=False, default_factory=threading.Lock)

    def __post_init__(self):
        self.form_type = FormType.parse(self.form_type)
        self._recompute()

    # ==================== Review operations ====================

    def accept(self, field_name: str) -> MappedField:
        """Take the machine suggestion as the field value."""
        with self._lock:
            target = self._require(field_name)
            previous = target.mapped_value
            target.accept()
            self._record(MappingActionType.ACCEPT, target, previous)
            return target

    def edit(self, field_name: str, new_value: str) -> MappedField:
        """Replace the field value with a human-entered one."""
        with self._lock:
            target = self._require(field_name)
            previous = target.mapped_value
            target.edit(new_value)
            self._record(MappingActionType.EDIT, target, previous)
            return target

    def reject(self, field_name: str) -> MappedField:
        with self._lock:
            target = self._require(field_name)
            previous = target.mapped_value
            target.reject()
            self._record(MappingActionType.REJECT, target, previous)
            return target

    # ==================== Queries ====================

    def get_field(self, field_name: str) -> Optional[MappedField]:
        for item in self.mapped_fields:
            if item.field_name == field_name:
                return item
        return None

    @property
    def manual_interventions(self) -> int:
        return len(self.actions)

    @property
    def accepted_fields(self) -> List[MappedField]:
        return [item for item in self.mapped_fields if item.is_accepted]

    @property
    def is_complete(self) -> bool:
        return not self.unmapped_fields and self.mapped_count == self.total_fields

    def final_data(self) -> Dict[str, Optional[str]]:
        """Accepted values keyed by field name; unaccepted and unmapped fields are None."""
        with self._lock:
            data: Dict[str, Optional[str]] = {name: None for name in self.unmapped_fields}
            for item in self.mapped_fields:
                data[item.field_name] = item.mapped_value if item.is_accepted else None
            return data

    # ==================== Internals ====================

    def _require(self, field_name: str) -> MappedField:
        target = self.get_field(field_name)
        if target is None:
            raise EntityNotFoundError("MappedField", field_name)
        return target

    def _record(self, action: MappingActionType, target: MappedField, previous: Optional[str]) -> None:
        self.actions.append(
            MappingAction(
                action=action,
                field_name=target.field_name,
                previous_value=previous,
                new_value=target.mapped_value,
            )
        )
        self._recompute()

    def _recompute(self) -> None:
        self.overall_confidence = Confidence.mean(item.confidence for item in self.mapped_fields)
        self.mapped_count = sum(1 for item in self.mapped_fields if item.has_value and item.is_accepted)

    # ==================== Serialization ====================

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "form_type": self.form_type.value,
                "mapped_fields": [item.to_dict() for item in self.mapped_fields],
                "unmapped_fields": list(self.unmapped_fields),
                "total_fields": self.total_fields,
                "mapped_count": self.mapped_count,
                "overall_confidence": self.overall_confidence.value,
                "metadata": {
                    "processing_ms": self.processing_ms,
                    "entities_used": self.entities_used,
                    "manual_interventions": self.manual_interventions,
                },
                "actions": [action.to_dict() for action in self.actions],
            }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MappingResult:
        metadata = data.get("metadata") or {}
        return cls(
            form_type=FormType.parse(data["form_type"]),
            mapped_fields=[MappedField.from_dict(item) for item in data.get("mapped_fields", [])],
            unmapped_fields=list(data.get("unmapped_fields", [])),
            total_fields=int(data.get("total_fields", 0)),
            processing_ms=float(metadata.get("processing_ms", 0.0)),
            entities_used=int(metadata.get("entities_used", 0)),
            actions=[MappingAction.from_dict(item) for item in data.get("actions", [])],
        )
