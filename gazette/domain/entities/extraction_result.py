"""
ExtractionResult Entity

Document-level output of the extraction stage. Built once per source document
and never mutated afterwards; human correction happens on MappingResult.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from gazette.constants import SERIALIZATION_VERSION

from ..value_objects.confidence import Confidence
from ..value_objects.language import Language
from .extracted_entity import ExtractedEntity
from .journal_page import JournalPage, PageReport
from .table_region import TableRegion


@dataclass(frozen=True)
class JournalMetadata:
    """Header facts about the gazette issue and its leading text."""

    journal_number: Optional[str] = None
    journal_date: Optional[str] = None
    publication_type: Optional[str] = None
    publication_number: Optional[str] = None
    title: Optional[str] = None
    institution: Optional[str] = None
    hijri_date: Optional[str] = None
    gregorian_date: Optional[str] = None
    references: Tuple[str, ...] = ()
    language: Optional[Language] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "journal_number": self.journal_number,
            "journal_date": self.journal_date,
            "publication_type": self.publication_type,
            "publication_number": self.publication_number,
            "title": self.title,
            "institution": self.institution,
            "hijri_date": self.hijri_date,
            "gregorian_date": self.gregorian_date,
            "references": list(self.references),
            "language": self.language.value if self.language else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> JournalMetadata:
        data = data or {}
        language = data.get("language")
        return cls(
            journal_number=data.get("journal_number"),
            journal_date=data.get("journal_date"),
            publication_type=data.get("publication_type"),
            publication_number=data.get("publication_number"),
            title=data.get("title"),
            institution=data.get("institution"),
            hijri_date=data.get("hijri_date"),
            gregorian_date=data.get("gregorian_date"),
            references=tuple(data.get("references") or ()),
            language=Language(language) if language else None,
        )


@dataclass(frozen=True)
class ExtractionResult:
    """
    Business rules:
    - Pages are ordered by page number
    - ``text_content`` joins zone text in column order, pages separated by a blank line
    - Tables are aggregated in page order without reordering
    - Overall confidence is the mean of page, entity and table confidences
    """

    document_id: str
    pages: Tuple[JournalPage, ...]
    text_content: str
    tables: Tuple[TableRegion, ...]
    entities: Tuple[ExtractedEntity, ...]
    metadata: JournalMetadata
    confidence: Confidence
    page_reports: Tuple[PageReport, ...] = ()
    processing_ms: float = 0.0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        for name in ('pages', 'tables', 'entities', 'page_reports'):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        numbers = [page.page_number for page in self.pages]
        if numbers != sorted(numbers):
            raise ValueError("Pages must be ordered by page number")

    @classmethod
    def create(
        cls,
        pages: List[JournalPage],
        entities: List[ExtractedEntity],
        metadata: JournalMetadata,
        *,
        page_reports: List[PageReport] | None = None,
        processing_ms: float = 0.0,
        document_id: str | None = None,
    ) -> ExtractionResult:
        ordered = sorted(pages, key=lambda p: p.page_number)
        tables = [table for page in ordered for table in page.tables]
        scores = (
            [page.confidence for page in ordered]
            + [entity.confidence for entity in entities]
            + [table.confidence for table in tables]
        )
        return cls(
            document_id=document_id or str(uuid4()),
            pages=tuple(ordered),
            text_content=cls.join_page_text(ordered),
            tables=tuple(tables),
            entities=tuple(entities),
            metadata=metadata,
            confidence=Confidence.mean(scores),
            page_reports=tuple(page_reports or ()),
            processing_ms=processing_ms,
        )

    @staticmethod
    def join_page_text(pages: List[JournalPage]) -> str:
        return "\n\n".join(page.text for page in pages)

    @property
    def failed_pages(self) -> List[int]:
        return [report.page_number for report in self.page_reports if not report.succeeded]

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_pages)

    def entities_of(self, entity_type) -> List[ExtractedEntity]:
        return [entity for entity in self.entities if entity.entity_type == entity_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": SERIALIZATION_VERSION,
            "document_id": self.document_id,
            "pages": [page.to_dict() for page in self.pages],
            "text_content": self.text_content,
            "tables": [table.to_dict() for table in self.tables],
            "entities": [entity.to_dict() for entity in self.entities],
            "metadata": self.metadata.to_dict(),
            "confidence": self.confidence.value,
            "page_reports": [report.to_dict() for report in self.page_reports],
            "processing_ms": self.processing_ms,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ExtractionResult:
        created_at = datetime.now(timezone.utc)
        if data.get("created_at"):
            try:
                created_at = datetime.fromisoformat(data["created_at"])
            except (TypeError, ValueError):
                pass
        return cls(
            document_id=data.get("document_id") or str(uuid4()),
            pages=tuple(JournalPage.from_dict(item) for item in data.get("pages", [])),
            text_content=data.get("text_content", ""),
            tables=tuple(TableRegion.from_dict(item) for item in data.get("tables", [])),
            entities=tuple(ExtractedEntity.from_dict(item) for item in data.get("entities", [])),
            metadata=JournalMetadata.from_dict(data.get("metadata")),
            confidence=Confidence.from_raw(data.get("confidence", 0.0)),
            page_reports=tuple(PageReport.from_dict(item) for item in data.get("page_reports", [])),
            processing_ms=float(data.get("processing_ms", 0.0)),
            created_at=created_at,
        )
