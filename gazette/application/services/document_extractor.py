"""
DocumentExtractor - end-to-end extraction for one scanned document.

Geometry runs in parallel across pages. A page whose geometry fails is
reported and skipped; the document fails only when no page survives.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from gazette.domain.entities.extraction_result import ExtractionResult
from gazette.domain.entities.journal_page import JournalPage, PageReport
from gazette.domain.entities.page_layout import PageLayout
from gazette.domain.exceptions import DocumentExtractionError, GeometryError
from gazette.domain.services.entity_extractor import EntityExtractor
from gazette.domain.services.metadata_extractor import MetadataExtractor

from .page_assembler import PageAssembler
from .page_layout_analyzer import PageLayoutAnalyzer

logger = logging.getLogger(__name__)

_PAGE_SEPARATOR = "\n\n"


class DocumentExtractor:
    def __init__(
        self,
        layout_analyzer: PageLayoutAnalyzer,
        page_assembler: PageAssembler,
        entity_extractor: Optional[EntityExtractor] = None,
        metadata_extractor: Optional[MetadataExtractor] = None,
        max_workers: int = 4,
    ):
        self._layouts = layout_analyzer
        self._assembler = page_assembler
        self._entities = entity_extractor or EntityExtractor()
        self._metadata = metadata_extractor or MetadataExtractor()
        self._max_workers = max(1, max_workers)

    def extract(self, rasters: Sequence[np.ndarray], document_id: Optional[str] = None) -> ExtractionResult:
        """
        Extract every page of a document; page numbers follow raster order from 1.

        Raises:
            DocumentExtractionError: If the document has no pages or every page failed
        """
        started = time.perf_counter()
        if not rasters:
            raise DocumentExtractionError("Document has no pages")

        layouts = self._analyze_pages(rasters)

        pages: List[JournalPage] = []
        reports: List[PageReport] = []
        for page_number, (layout, error) in enumerate(layouts, start=1):
            if layout is None:
                reports.append(PageReport.failure(page_number, error))
                continue
            try:
                assembled = self._assembler.assemble(page_number, rasters[page_number - 1], layout)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Page %d failed during assembly: %s", page_number, exc, exc_info=True)
                reports.append(PageReport.failure(page_number, str(exc)))
                continue
            pages.append(assembled.page)
            reports.append(PageReport.success(page_number, assembled.failed_regions))

        if not pages:
            raise DocumentExtractionError(f"All {len(rasters)} pages failed extraction", reports)

        text = _PAGE_SEPARATOR.join(page.text for page in pages)
        offsets = EntityExtractor.page_offsets([(page.page_number, page.text) for page in pages], _PAGE_SEPARATOR)
        entities = self._entities.extract(text, offsets)
        metadata = self._metadata.extract(text, entities)

        result = ExtractionResult.create(
            pages,
            entities,
            metadata,
            page_reports=reports,
            processing_ms=(time.perf_counter() - started) * 1000,
            document_id=document_id,
        )
        logger.info(
            "Extracted document %s: %d/%d pages, %d entities, %d tables, confidence %s",
            result.document_id, len(pages), len(rasters), len(entities), len(result.tables), result.confidence,
        )
        return result

    def _analyze_pages(self, rasters: Sequence[np.ndarray]) -> List[Tuple[Optional[PageLayout], Optional[str]]]:
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(rasters)), thread_name_prefix="layout") as executor:
            futures = [executor.submit(self._layouts.analyze, raster) for raster in rasters]
            outcomes: List[Tuple[Optional[PageLayout], Optional[str]]] = []
            for page_number, future in enumerate(futures, start=1):
                try:
                    outcomes.append((future.result(), None))
                except GeometryError as exc:
                    logger.warning("Page %d geometry failed: %s", page_number, exc)
                    outcomes.append((None, str(exc)))
            return outcomes
