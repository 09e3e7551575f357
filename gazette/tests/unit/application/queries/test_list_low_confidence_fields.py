"""Unit tests for ListLowConfidenceFieldsHandler."""
from __future__ import annotations

from typing import List

import pytest

from conftest import make_mapped_field
from gazette.application.queries.list_low_confidence_fields import (
    ListLowConfidenceFieldsHandler,
    ListLowConfidenceFieldsQuery,
)
from gazette.domain.entities.mapping_result import MappingResult
from gazette.domain.entities.pipeline_session import PipelineSession
from gazette.domain.services.confidence_calculator import ConfidenceCalculator
from gazette.domain.value_objects.pipeline_stage import PipelineStage


@pytest.fixture
def make_session(session_repository, extraction_result):
    def _make(session_id: str, confidences: List[float]) -> PipelineSession:
        session = PipelineSession.create(f"{session_id}.pdf", session_id=session_id)
        session.complete(PipelineStage.EXTRACTION, extraction_result)
        fields = [
            make_mapped_field(f"field_{index}", confidence)
            for index, confidence in enumerate(confidences, start=1)
        ]
        session.complete(
            PipelineStage.MAPPING,
            MappingResult(form_type="decree", mapped_fields=fields, unmapped_fields=[], total_fields=len(fields)),
        )
        session_repository.save(session)
        return session

    return _make


def test_returns_low_confidence_fields_sorted(session_repository, make_session):
    make_session("session-a", [0.35, 0.55, 0.2])
    handler = ListLowConfidenceFieldsHandler(session_repository)

    results = handler.handle(ListLowConfidenceFieldsQuery())

    assert [item.name for item in results] == ["field_3", "field_1"]
    assert results[0].label == "Field 3"
    assert results[0].document_name == "session-a.pdf"
    assert results[0].page is None


def test_sorts_across_sessions_and_applies_limit(session_repository, make_session):
    make_session("session-a", [0.3, 0.8])
    make_session("session-b", [0.25, 0.4])
    handler = ListLowConfidenceFieldsHandler(session_repository)

    results = handler.handle(ListLowConfidenceFieldsQuery())
    assert [(item.session_id, item.confidence) for item in results] == [
        ("session-b", 0.25),
        ("session-a", 0.3),
        ("session-b", 0.4),
    ]

    limited = handler.handle(ListLowConfidenceFieldsQuery(limit=1))
    assert [item.session_id for item in limited] == ["session-b"]


def test_filters_by_session(session_repository, make_session):
    make_session("session-a", [0.3])
    make_session("session-b", [0.25])

    results = ListLowConfidenceFieldsHandler(session_repository).handle(
        ListLowConfidenceFieldsQuery(session_id="session-a")
    )

    assert [item.session_id for item in results] == ["session-a"]


@pytest.mark.parametrize("limit", [0, -3])
def test_non_positive_limit_returns_nothing(session_repository, make_session, limit):
    make_session("session-a", [0.1])

    assert ListLowConfidenceFieldsHandler(session_repository).handle(ListLowConfidenceFieldsQuery(limit=limit)) == []


def test_sessions_without_mapping_are_skipped(session_repository, extracted_session):
    assert ListLowConfidenceFieldsHandler(session_repository).handle(ListLowConfidenceFieldsQuery()) == []


def test_threshold_comes_from_calculator(session_repository, make_session):
    make_session("session-a", [0.3, 0.55, 0.75])
    handler = ListLowConfidenceFieldsHandler(session_repository, ConfidenceCalculator(low_threshold=0.6))

    results = handler.handle(ListLowConfidenceFieldsQuery())

    assert [item.confidence for item in results] == [0.3, 0.55]
