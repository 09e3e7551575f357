"""Pytest configuration for gazette tests.

Ensures the project root is on sys.path so ``gazette.*`` imports resolve
during test collection, and provides synthetic page rasters.
"""
from __future__ import annotations

import sys
from pathlib import Path

import cv2
import numpy as np
import pytest

# Add repository root to sys.path for module resolution.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

PAGE_WIDTH = 1000
PAGE_HEIGHT = 1400


def blank_raster(width: int = PAGE_WIDTH, height: int = PAGE_HEIGHT) -> np.ndarray:
    return np.full((height, width), 255, dtype=np.uint8)


def draw_horizontal(raster: np.ndarray, y: int, x_start: int, x_end: int, thickness: int = 3) -> np.ndarray:
    cv2.line(raster, (x_start, y), (x_end, y), color=0, thickness=thickness)
    return raster


def draw_vertical(raster: np.ndarray, x: int, y_start: int, y_end: int, thickness: int = 3) -> np.ndarray:
    cv2.line(raster, (x, y_start), (x, y_end), color=0, thickness=thickness)
    return raster


@pytest.fixture
def blank_page() -> np.ndarray:
    return blank_raster()


@pytest.fixture
def masthead_page() -> np.ndarray:
    """Single-column page with the three masthead rules at the top."""
    raster = blank_raster()
    for y in (8, 22, 36):
        draw_horizontal(raster, y, 40, 960)
    return raster


@pytest.fixture
def two_column_page() -> np.ndarray:
    """Page with one central gutter rule between two text columns."""
    return draw_vertical(blank_raster(), 500, 100, 1300)


def make_page(page_number: int = 1, texts=("",), confidence: float = 0.8, tables=()):
    """JournalPage with one zone per entry of ``texts``, left to right."""
    from gazette.domain.entities.border_region import BorderRegion
    from gazette.domain.entities.journal_page import JournalPage
    from gazette.domain.entities.text_zone import TextZone
    from gazette.domain.value_objects.bounding_box import BoundingBox

    content = BoundingBox(50, 70, 900, 1260)
    column_width = content.width // len(texts)
    zones = [
        TextZone(
            BoundingBox(content.x + index * column_width, content.y, column_width, content.height),
            column_index=index,
            text=text,
            confidence=confidence,
        )
        for index, text in enumerate(texts)
    ]
    return JournalPage.create(
        page_number,
        PAGE_WIDTH,
        PAGE_HEIGHT,
        horizontal_lines=[],
        vertical_lines=[],
        border_region=BorderRegion(PAGE_WIDTH, PAGE_HEIGHT, content),
        tables=list(tables),
        zones=zones,
    )


def make_mapped_field(name: str, confidence: float, value: str = "value", required: bool = False):
    from gazette.domain.entities.mapped_field import MappedField
    from gazette.domain.value_objects.form_schema import FieldKind

    return MappedField(
        field_name=name,
        label=name.replace("_", " ").title(),
        kind=FieldKind.TEXT,
        raw_value=value,
        suggested_value=value,
        confidence=confidence,
        required=required,
    )


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture
def field_factory():
    return make_mapped_field


@pytest.fixture
def extraction_result(page_factory):
    from gazette.domain.entities.extraction_result import ExtractionResult, JournalMetadata

    return ExtractionResult.create([page_factory()], [], JournalMetadata(), document_id="doc-1")


FRENCH_DECREE = (
    "JOURNAL OFFICIEL DE LA REPUBLIQUE ALGERIENNE N° 45\n"
    "12 juillet 2020\n"
    "Ministère de l'intérieur et des collectivités locales\n"
    "Décret exécutif n° 20-123 du 21 Dhou El Kaada 1441 correspondant au 12 juillet 2020 "
    "fixant les modalités d'application.\n"
    "Le Premier ministre,\n"
    "Vu la Constitution ;\n"
    "Vu la loi n° 90-11 du 21 avril 1990 ;\n"
    "Décrète :\n"
    "Article 1er. — Le présent décret a pour objet de fixer les modalités d'application.\n"
    "Art. 2. — Le présent décret sera publié au Journal officiel.\n"
    "Fait à Alger, le 21 Dhou El Kaada 1441 correspondant au 12 juillet 2020.\n"
    "Abdelaziz DJERAD\n"
)

ARABIC_DECREE = (
    "مرسوم تنفيذي رقم 20-123 مؤرخ في 21 ذو القعدة عام 1441 الموافق 12 يوليو سنة 2020، يحدد كيفيات التطبيق.\n"
    "إن الوزير الأول،\n"
    "بمقتضى الدستور،\n"
    "يرسم ما يأتي:\n"
    "المادة الأولى: يهدف هذا المرسوم إلى تحديد كيفيات التطبيق.\n"
    "المادة 2: ينشر هذا المرسوم في الجريدة الرسمية.\n"
    "حرر بالجزائر في 21 ذو القعدة عام 1441 الموافق 12 يوليو سنة 2020.\n"
    "عبد العزيز جراد\n"
)


@pytest.fixture(scope="session")
def french_decree() -> str:
    return FRENCH_DECREE


@pytest.fixture(scope="session")
def arabic_decree() -> str:
    return ARABIC_DECREE


@pytest.fixture
def session_repository():
    from gazette.infrastructure.persistence.in_memory_session_repository import InMemorySessionRepository

    return InMemorySessionRepository()


@pytest.fixture
def extracted_session(session_repository, page_factory, french_decree):
    """Stored session whose extraction stage holds the French decree sample."""
    from gazette.domain.entities.extraction_result import ExtractionResult
    from gazette.domain.entities.pipeline_session import PipelineSession
    from gazette.domain.services.entity_extractor import EntityExtractor
    from gazette.domain.services.metadata_extractor import MetadataExtractor
    from gazette.domain.value_objects.pipeline_stage import PipelineStage

    entities = EntityExtractor().extract(french_decree)
    extraction = ExtractionResult.create(
        [page_factory(1, (french_decree,))],
        entities,
        MetadataExtractor().extract(french_decree, entities),
        document_id="session-fr",
    )
    session = PipelineSession.create("jo-2020-45.pdf", session_id="session-fr")
    session.complete(PipelineStage.EXTRACTION, extraction)
    session_repository.save(session)
    return session
