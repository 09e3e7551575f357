"""
Default validation collaborator for mapping results.

Produces (severity, field_path, message) diagnostics. A report passes when it
has no critical diagnostic.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Protocol

from gazette.domain.entities.mapped_field import MappedField
from gazette.domain.entities.mapping_result import MappingResult
from gazette.domain.entities.validation_report import Diagnostic, Severity, ValidationReport
from gazette.domain.value_objects.form_schema import FieldKind, FormFieldDefinition, FormSchemaRegistry

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class MappingValidator(Protocol):
    def validate(self, mapping: MappingResult, target_id: Optional[str] = None) -> ValidationReport: ...


class SchemaValidator:
    def __init__(self, low_threshold: float = 0.4):
        self._low_threshold = low_threshold

    def validate(self, mapping: MappingResult, target_id: Optional[str] = None) -> ValidationReport:
        schema = FormSchemaRegistry.get(mapping.form_type)
        diagnostics: List[Diagnostic] = []
        for definition in schema.fields:
            path = f"{schema.form_type.value}.{definition.name}"
            diagnostics.extend(self._check(definition, mapping.get_field(definition.name), path))

        report = ValidationReport(diagnostics=tuple(diagnostics), target_id=target_id)
        logger.info(
            "Validated %s mapping: passed=%s diagnostics=%d",
            schema.form_type.value, report.passed, len(diagnostics),
        )
        return report

    def _check(self, definition: FormFieldDefinition, item: Optional[MappedField], path: str) -> List[Diagnostic]:
        if item is None:
            if definition.required:
                return [Diagnostic(Severity.CRITICAL, path, "Required field was not found in the document")]
            return [Diagnostic(Severity.LOW, path, "No value found")]

        if item.is_accepted and not item.has_value:
            severity = Severity.CRITICAL if definition.required else Severity.LOW
            return [Diagnostic(severity, path, "Field was accepted without a value")]

        found: List[Diagnostic] = []
        if not item.is_accepted:
            if definition.required:
                found.append(Diagnostic(Severity.HIGH, path, "Required field has not been reviewed"))
            elif item.mapped_value is None and item.suggested_value is None:
                found.append(Diagnostic(Severity.LOW, path, "Field was rejected"))

        value = item.mapped_value if item.is_accepted else item.suggested_value
        if item.confidence.value <= self._low_threshold:
            found.append(Diagnostic(Severity.MEDIUM, path, f"Low confidence ({item.confidence})"))
        if value and definition.kind == FieldKind.DATE and definition.attribute == "iso_value" and not _ISO_DATE.match(value):
            found.append(Diagnostic(Severity.MEDIUM, path, f"Date '{value}' is not in YYYY-MM-DD form"))
        if value and definition.kind == FieldKind.COUNT and not value.isdigit():
            found.append(Diagnostic(Severity.MEDIUM, path, f"Count '{value}' is not a whole number"))
        return found
