"""Unit tests for PageAssembler with fake OCR collaborators."""
import threading
import time

import pytest

from conftest import blank_raster
from gazette.application.services.page_assembler import PageAssembler
from gazette.config import Settings
from gazette.domain.entities.border_region import BorderRegion
from gazette.domain.entities.page_layout import PageLayout
from gazette.domain.entities.table_region import TableCell, TableRegion
from gazette.domain.entities.text_zone import TextZone
from gazette.domain.exceptions import ExtractionFailure
from gazette.domain.value_objects.bounding_box import BoundingBox
from gazette.domain.value_objects.language import Language, LanguageHint
from gazette.domain.value_objects.ocr_result import OcrResult

CONTENT = BoundingBox(50, 70, 900, 1260)


class SizeEchoOcrClient:
    """Answers with the region size so each result can be traced to its region."""

    def __init__(self, confidence=0.9):
        self.confidence = confidence
        self.languages = []
        self._lock = threading.Lock()

    def recognize(self, region, language=LanguageHint.AUTO):
        with self._lock:
            self.languages.append(language)
        return OcrResult.create(f"zone {region.shape[1]}x{region.shape[0]}", self.confidence)


class CellFailingOcrClient(SizeEchoOcrClient):
    def recognize(self, region, language=LanguageHint.AUTO):
        if region.shape[1] < 300:
            raise ExtractionFailure("model refused the region")
        return super().recognize(region, language)


class DroppedConnectionOcrClient(SizeEchoOcrClient):
    def recognize(self, region, language=LanguageHint.AUTO):
        if region.shape[1] < 300:
            raise ConnectionError("connection reset by peer")
        return super().recognize(region, language)


class SlowCellOcrClient(SizeEchoOcrClient):
    def recognize(self, region, language=LanguageHint.AUTO):
        if region.shape[1] < 300:
            time.sleep(1.0)
        return super().recognize(region, language)


@pytest.fixture
def layout():
    table = TableRegion(
        BoundingBox(100, 600, 400, 200),
        rows=1,
        columns=2,
        cells=(
            TableCell(0, 0, BoundingBox(100, 600, 200, 200)),
            TableCell(0, 1, BoundingBox(300, 600, 200, 200)),
        ),
        confidence=0.5,
    )
    return PageLayout(
        width=1000,
        height=1400,
        horizontal_lines=(),
        vertical_lines=(),
        border_region=BorderRegion(1000, 1400, CONTENT),
        tables=(table,),
        zones=(
            TextZone(BoundingBox(50, 70, 450, 400), column_index=0),
            TextZone(BoundingBox(500, 70, 450, 400), column_index=1),
        ),
        duration_ms=5.0,
    )


def make_settings(**overrides):
    values = {"OCR_MAX_CONCURRENCY": 2, "OCR_TIMEOUT_SECONDS": 5.0}
    values.update(overrides)
    return Settings(**values)


def test_every_region_gets_its_own_text(layout):
    assembled = PageAssembler(SizeEchoOcrClient(), make_settings()).assemble(2, blank_raster(), layout)

    page = assembled.page
    assert assembled.failed_regions == 0
    assert page.page_number == 2
    assert [zone.text for zone in page.zones] == ["zone 450x400", "zone 450x400"]
    assert [cell.text for cell in page.tables[0].cells] == ["zone 200x200", "zone 200x200"]
    assert page.tables[0].page_number == 2
    # zones plus the table's detection confidence
    assert page.confidence.value == pytest.approx((0.9 + 0.9 + 0.5) / 3)
    assert page.language == Language.FRENCH
    assert page.processing_ms >= 5.0


def test_language_hint_comes_from_settings(layout):
    client = SizeEchoOcrClient()
    PageAssembler(client, make_settings(OCR_LANGUAGE_HINT="ar")).assemble(1, blank_raster(), layout)
    assert set(client.languages) == {LanguageHint.ARABIC}


def test_failed_regions_keep_empty_text(layout):
    assembled = PageAssembler(CellFailingOcrClient(), make_settings()).assemble(1, blank_raster(), layout)

    assert assembled.failed_regions == 2
    cells = assembled.page.tables[0].cells
    assert [cell.text for cell in cells] == ["", ""]
    assert all(cell.confidence.value == 0.0 for cell in cells)
    assert assembled.page.zones[0].text == "zone 450x400"
    assert assembled.page.confidence.value == pytest.approx((0.9 + 0.9 + 0.5) / 3)


def test_timed_out_regions_do_not_block_the_page(layout):
    started = time.perf_counter()
    assembled = PageAssembler(SlowCellOcrClient(), make_settings(OCR_TIMEOUT_SECONDS=0.2)).assemble(
        1, blank_raster(), layout
    )

    assert time.perf_counter() - started < 0.9
    assert assembled.failed_regions == 2
    assert [zone.text for zone in assembled.page.zones] == ["zone 450x400", "zone 450x400"]


def test_layout_without_regions(layout):
    from dataclasses import replace

    empty = replace(layout, tables=(), zones=())
    assembled = PageAssembler(SizeEchoOcrClient(), make_settings()).assemble(1, blank_raster(), empty)

    assert assembled.page.text == ""
    assert assembled.page.confidence.value == 0.0
    assert assembled.page.language is None


def test_unexpected_client_errors_mark_regions_failed(layout, caplog):
    with caplog.at_level("WARNING"):
        assembled = PageAssembler(DroppedConnectionOcrClient(), make_settings()).assemble(1, blank_raster(), layout)

    assert assembled.failed_regions == 2
    assert [cell.text for cell in assembled.page.tables[0].cells] == ["", ""]
    assert [zone.text for zone in assembled.page.zones] == ["zone 450x400", "zone 450x400"]
    assert "connection reset by peer" in caplog.text
