"""Derives gazette-level metadata from extracted entities."""
from __future__ import annotations

from typing import List, Optional, Sequence

from gazette.domain.entities.extracted_entity import (
    DateEntity,
    ExtractedEntity,
    InstitutionEntity,
    NumberEntity,
    PublicationEntity,
    ReferenceEntity,
)
from gazette.domain.entities.extraction_result import JournalMetadata
from gazette.domain.value_objects.entity_type import Calendar, NumberScope

from .language_detector import detect_language


class MetadataExtractor:
    def extract(self, text: str, entities: Sequence[ExtractedEntity]) -> JournalMetadata:
        ordered = sorted(entities, key=lambda e: (e.start, e.end))
        publications = [e for e in ordered if isinstance(e, PublicationEntity)]
        dates = [e for e in ordered if isinstance(e, DateEntity)]
        lead = publications[0] if publications else None

        journal_number = next(
            (e.number for e in ordered if isinstance(e, NumberEntity) and e.scope == NumberScope.JOURNAL),
            None,
        )
        # Issue date is printed in the masthead, ahead of the first text.
        masthead_dates = [d for d in dates if lead is None or d.end <= lead.start]
        journal_date = next(
            (d.iso_value or d.value for d in masthead_dates if d.calendar == Calendar.GREGORIAN),
            None,
        )

        institution = next((e.value for e in ordered if isinstance(e, InstitutionEntity)), None)
        references = tuple(e.value for e in ordered if isinstance(e, ReferenceEntity))

        return JournalMetadata(
            journal_number=journal_number,
            journal_date=journal_date,
            publication_type=lead.publication_kind.value if lead else None,
            publication_number=lead.reference_number if lead else None,
            title=lead.title if lead else None,
            institution=institution,
            hijri_date=self._date_after(dates, lead, Calendar.HIJRI),
            gregorian_date=self._date_after(dates, lead, Calendar.GREGORIAN),
            references=references,
            language=detect_language(text),
        )

    @staticmethod
    def _date_after(
        dates: List[DateEntity],
        anchor: Optional[PublicationEntity],
        calendar: Calendar,
    ) -> Optional[str]:
        """First date of ``calendar`` at or after the lead text's heading."""
        for item in dates:
            if item.calendar != calendar:
                continue
            if anchor is None or item.start >= anchor.start:
                return item.iso_value or item.value
        return None
