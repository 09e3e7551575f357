"""
ExtractedEntity variants

Typed legal fragments found in recognized text. One dataclass per entity type;
``ExtractedEntity.from_dict`` dispatches on the serialized ``type`` tag.

Entities are derived data: several rules may report the same fragment and
nothing here deduplicates them.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Optional, Type

from ..value_objects.confidence import Confidence
from ..value_objects.entity_type import Calendar, EntityType, NumberScope, PublicationKind


@dataclass(frozen=True)
class ExtractedEntity:
    """Common part of every entity: literal text, score and location."""

    value: str
    confidence: Confidence
    start: int
    end: int
    page_number: int = 1
    rule: str = ""

    entity_type: ClassVar[EntityType]
    _registry: ClassVar[Dict[EntityType, Type["ExtractedEntity"]]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        entity_type = cls.__dict__.get("entity_type")
        if entity_type is not None:
            ExtractedEntity._registry[entity_type] = cls

    def __post_init__(self):
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, 'confidence', Confidence.from_raw(self.confidence))
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid source span ({self.start}, {self.end})")

    @property
    def position(self) -> tuple[int, int]:
        return (self.start, self.end)

    def distance_to(self, other: ExtractedEntity) -> int:
        """Character distance between two spans, 0 when they overlap."""
        if self.end <= other.start:
            return other.start - self.end
        if other.end <= self.start:
            return self.start - other.end
        return 0

    def attribute(self, name: str) -> Optional[str]:
        """Attribute used by field mapping; enums are rendered by value."""
        raw = getattr(self, name, None)
        if raw is None:
            return None
        if hasattr(raw, "value") and not isinstance(raw, Confidence):
            raw = raw.value
        text = str(raw).strip()
        return text or None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.entity_type.value}
        for item in fields(self):
            raw = getattr(self, item.name)
            if isinstance(raw, Confidence):
                raw = raw.value
            elif hasattr(raw, "value"):
                raw = raw.value
            data[item.name] = raw
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ExtractedEntity:
        target = cls._registry[EntityType(data["type"])]
        kwargs = {item.name: data[item.name] for item in fields(target) if item.name in data}
        return target(**target._coerce(kwargs))

    @classmethod
    def _coerce(cls, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        return kwargs


@dataclass(frozen=True)
class PublicationEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.PUBLICATION_TYPE

    publication_kind: PublicationKind = PublicationKind.LOI
    reference_number: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def _coerce(cls, kwargs):
        if "publication_kind" in kwargs:
            kwargs["publication_kind"] = PublicationKind(kwargs["publication_kind"])
        return kwargs


@dataclass(frozen=True)
class DateEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.DATE

    calendar: Calendar = Calendar.GREGORIAN
    iso_value: Optional[str] = None

    @classmethod
    def _coerce(cls, kwargs):
        if "calendar" in kwargs:
            kwargs["calendar"] = Calendar(kwargs["calendar"])
        return kwargs


@dataclass(frozen=True)
class NumberEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.NUMBER

    number: str = ""
    scope: NumberScope = NumberScope.REFERENCE

    @classmethod
    def _coerce(cls, kwargs):
        if "scope" in kwargs:
            kwargs["scope"] = NumberScope(kwargs["scope"])
        return kwargs


@dataclass(frozen=True)
class InstitutionEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.INSTITUTION


@dataclass(frozen=True)
class ReferenceEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.REFERENCE


@dataclass(frozen=True)
class ArticleEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.ARTICLE

    article_number: str = ""


@dataclass(frozen=True)
class AnnexeEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.ANNEXE


@dataclass(frozen=True)
class SignatoryEntity(ExtractedEntity):
    entity_type: ClassVar[EntityType] = EntityType.SIGNATORY
