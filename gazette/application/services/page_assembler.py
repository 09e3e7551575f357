"""
PageAssembler - fills a page layout with recognized text.

Every text zone and table cell is sent to the OCR collaborator through a
bounded thread pool. A region whose call fails or times out keeps empty text
with zero confidence, and the page is still assembled.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Tuple

import numpy as np

from gazette.config import Settings, get_settings
from gazette.constants import FAILED_REGION_CONFIDENCE
from gazette.domain.entities.journal_page import JournalPage
from gazette.domain.entities.page_layout import PageLayout
from gazette.domain.entities.table_region import TableRegion
from gazette.domain.exceptions import ExtractionFailure, GeometryError
from gazette.domain.services.language_detector import detect_language
from gazette.domain.value_objects.bounding_box import BoundingBox
from gazette.domain.value_objects.language import LanguageHint
from gazette.domain.value_objects.ocr_result import OcrResult
from gazette.infrastructure.imaging.raster import crop_region

logger = logging.getLogger(__name__)


class OcrClient(Protocol):
    def recognize(self, region: np.ndarray, language: LanguageHint = LanguageHint.AUTO) -> OcrResult: ...


@dataclass(frozen=True)
class AssembledPage:
    page: JournalPage
    failed_regions: int = 0


class PageAssembler:
    def __init__(self, ocr_client: OcrClient, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self._ocr = ocr_client
        self._max_workers = max(1, settings.ocr_max_concurrency)
        self._timeout = settings.ocr_timeout_seconds
        self._language = LanguageHint(settings.ocr_language_hint)

    def assemble(self, page_number: int, raster: np.ndarray, layout: PageLayout) -> AssembledPage:
        started = time.perf_counter()
        regions: List[BoundingBox] = [zone.bounding_box for zone in layout.zones]
        regions += [cell.bounding_box for table in layout.tables for cell in table.cells]

        results, failed = self._recognize_all(page_number, raster, regions)

        zone_results = results[:len(layout.zones)]
        zones = [
            zone.with_text(result.text, result.confidence.value, detect_language(result.text))
            for zone, result in zip(layout.zones, zone_results)
        ]
        tables = self._fill_tables(layout.tables, results[len(layout.zones):])

        page = JournalPage.create(
            page_number,
            layout.width,
            layout.height,
            horizontal_lines=list(layout.horizontal_lines),
            vertical_lines=list(layout.vertical_lines),
            border_region=layout.border_region,
            tables=tables,
            zones=zones,
            processing_ms=layout.duration_ms + (time.perf_counter() - started) * 1000,
        )
        page = replace(page, language=detect_language(page.text))
        logger.info(
            "Assembled page %d: %d zones, %d tables, %d failed regions, confidence %s",
            page_number, len(zones), len(tables), failed, page.confidence,
        )
        return AssembledPage(page=page, failed_regions=failed)

    def _recognize_all(
        self,
        page_number: int,
        raster: np.ndarray,
        regions: List[BoundingBox],
    ) -> Tuple[List[OcrResult], int]:
        if not regions:
            return [], 0

        executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="ocr")
        try:
            futures: List[Future] = [
                executor.submit(self._ocr.recognize, crop_region(raster, region), self._language)
                for region in regions
            ]
            results: List[OcrResult] = []
            failed = 0
            for region, future in zip(regions, futures):
                try:
                    results.append(future.result(timeout=self._timeout))
                except FuturesTimeoutError:
                    future.cancel()
                    logger.warning("OCR timed out on page %d region %s", page_number, region)
                    results.append(_failed_region())
                    failed += 1
                except (ExtractionFailure, GeometryError) as exc:
                    logger.warning("OCR failed on page %d region %s: %s", page_number, region, exc)
                    results.append(_failed_region())
                    failed += 1
                except Exception as exc:  # noqa: BLE001
                    logger.warning(
                        "Unexpected OCR error on page %d region %s: %s", page_number, region, exc, exc_info=True,
                    )
                    results.append(_failed_region())
                    failed += 1
            return results, failed
        finally:
            # A timed-out call may still be running; do not wait for it.
            executor.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _fill_tables(tables: Tuple[TableRegion, ...], results: List[OcrResult]) -> List[TableRegion]:
        filled: List[TableRegion] = []
        cursor = 0
        for table in tables:
            cells = [
                cell.with_text(result.text, result.confidence.value)
                for cell, result in zip(table.cells, results[cursor:cursor + len(table.cells)])
            ]
            cursor += len(table.cells)
            filled.append(table.with_cells(cells))
        return filled


def _failed_region() -> OcrResult:
    return OcrResult(text="", confidence=FAILED_REGION_CONFIDENCE)
