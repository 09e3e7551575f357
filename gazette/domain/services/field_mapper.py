"""
FieldMapper domain service.

Assigns extracted entities to the fields of a target form schema. Each field
declares which entity type feeds it and how to choose among several
candidates; fields left without a candidate are reported as unmapped.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence, Set

from gazette.domain.entities.extracted_entity import DateEntity, ExtractedEntity, NumberEntity, PublicationEntity
from gazette.domain.entities.mapped_field import MappedField
from gazette.domain.entities.mapping_result import MappingResult
from gazette.domain.value_objects.confidence import Confidence
from gazette.domain.value_objects.entity_type import EntityType
from gazette.domain.value_objects.form_schema import (
    FieldSelector,
    FormFieldDefinition,
    FormSchema,
    FormSchemaRegistry,
    FormType,
)

logger = logging.getLogger(__name__)

LIST_SEPARATOR = "; "


class FieldMapper:
    def map(self, entities: Sequence[ExtractedEntity], form_type: FormType | str) -> MappingResult:
        """
        Build a MappingResult for ``form_type``.

        Raises:
            UnknownFormType: if ``form_type`` is not one of the fixed schemas
        """
        started = time.perf_counter()
        schema = FormSchemaRegistry.get(form_type)
        ordered = sorted(entities, key=lambda e: (e.start, e.end))
        anchor = self.find_anchor(ordered, schema)

        mapped: List[MappedField] = []
        unmapped: List[str] = []
        used: Set[ExtractedEntity] = set()
        for definition in sorted(schema.fields, key=lambda d: d.order):
            candidates = self._candidates(definition, ordered, anchor)
            if not candidates:
                unmapped.append(definition.name)
                continue
            mapped.append(self._build_field(definition, candidates, anchor, used))

        result = MappingResult(
            form_type=schema.form_type,
            mapped_fields=mapped,
            unmapped_fields=unmapped,
            total_fields=len(schema.fields),
            processing_ms=(time.perf_counter() - started) * 1000.0,
            entities_used=len(used),
        )
        logger.info(
            "Mapped %d/%d fields for form %s from %d entities",
            len(mapped), len(schema.fields), schema.form_type.value, len(entities),
        )
        return result

    @staticmethod
    def find_anchor(entities: Sequence[ExtractedEntity], schema: FormSchema) -> Optional[PublicationEntity]:
        """First publication heading whose kind belongs to the schema."""
        for entity in entities:
            if isinstance(entity, PublicationEntity) and entity.publication_kind in schema.publication_kinds:
                return entity
        return None

    # ------------------------------------------------------------------
    # Candidate selection
    # ------------------------------------------------------------------
    def _candidates(
        self,
        definition: FormFieldDefinition,
        entities: Sequence[ExtractedEntity],
        anchor: Optional[PublicationEntity],
    ) -> List[ExtractedEntity]:
        if definition.selector == FieldSelector.ANCHOR:
            pool: List[ExtractedEntity] = [anchor] if anchor is not None else []
        else:
            pool = [e for e in entities if e.entity_type == definition.entity_type]
        if definition.calendar is not None:
            pool = [e for e in pool if isinstance(e, DateEntity) and e.calendar == definition.calendar]
        if definition.scope is not None:
            pool = [e for e in pool if isinstance(e, NumberEntity) and e.scope == definition.scope]
        if definition.entity_type == EntityType.PUBLICATION_TYPE and definition.selector != FieldSelector.ANCHOR:
            pool = [e for e in pool if isinstance(e, PublicationEntity)]
        return [e for e in pool if e.attribute(definition.attribute) is not None]

    def _pick(
        self,
        selector: FieldSelector,
        candidates: List[ExtractedEntity],
        anchor: Optional[PublicationEntity],
    ) -> ExtractedEntity:
        if selector == FieldSelector.LAST:
            return candidates[-1]
        if selector == FieldSelector.BEST:
            return max(candidates, key=lambda e: (e.confidence.value, -e.start))
        if selector == FieldSelector.NEAREST_TO_ANCHOR and anchor is not None:
            return min(
                candidates,
                key=lambda e: (e.distance_to(anchor), 0 if e.start >= anchor.start else 1, e.start),
            )
        return candidates[0]

    def _build_field(
        self,
        definition: FormFieldDefinition,
        candidates: List[ExtractedEntity],
        anchor: Optional[PublicationEntity],
        used: Set[ExtractedEntity],
    ) -> MappedField:
        if definition.selector in (FieldSelector.ALL, FieldSelector.COUNT):
            values = _unique(e.attribute(definition.attribute) for e in candidates)
            used.update(candidates)
            if definition.selector == FieldSelector.COUNT:
                suggested = str(len(values))
            else:
                suggested = LIST_SEPARATOR.join(values)
            return MappedField(
                field_name=definition.name,
                label=definition.label,
                kind=definition.kind,
                raw_value=LIST_SEPARATOR.join(_unique(e.value for e in candidates)),
                suggested_value=suggested,
                confidence=Confidence.mean(e.confidence for e in candidates),
                required=definition.required,
                source_entity=candidates[0],
            )

        chosen = self._pick(definition.selector, candidates, anchor)
        used.add(chosen)
        return MappedField(
            field_name=definition.name,
            label=definition.label,
            kind=definition.kind,
            raw_value=chosen.value,
            suggested_value=chosen.attribute(definition.attribute),
            confidence=chosen.confidence,
            required=definition.required,
            source_entity=chosen,
        )


def _unique(values) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen
