"""Shared factories for the pipeline's repositories, services and handlers.

Object construction lives here so entry points depend on simple callables.
Everything is built once per process; tests swap collaborators by patching
the private factories and clearing their caches.
"""
from __future__ import annotations

from functools import lru_cache

from gazette.application.commands.create_session import CreateSessionHandler
from gazette.application.commands.review_field import ReviewFieldHandler
from gazette.application.commands.run_extraction import RunExtractionHandler
from gazette.application.commands.run_mapping import RunMappingHandler
from gazette.application.commands.run_validation import RunValidationHandler
from gazette.application.commands.submit_workflow import SubmitWorkflowHandler
from gazette.application.queries.get_session_status import GetSessionStatusHandler
from gazette.application.queries.list_low_confidence_fields import ListLowConfidenceFieldsHandler
from gazette.application.services.document_extractor import DocumentExtractor
from gazette.application.services.page_assembler import OcrClient, PageAssembler
from gazette.application.services.page_layout_analyzer import PageLayoutAnalyzer
from gazette.config import get_settings
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.services.confidence_calculator import ConfidenceCalculator
from gazette.domain.services.schema_validator import SchemaValidator
from gazette.infrastructure.ocr.azure_ocr_client import AzureOpenAIOcrClient
from gazette.infrastructure.persistence.in_memory_session_repository import InMemorySessionRepository


@lru_cache()
def _session_repository() -> SessionRepository:
    return InMemorySessionRepository()


def get_session_repository() -> SessionRepository:
    """Provide a singleton session repository instance."""
    return _session_repository()


@lru_cache()
def _ocr_client() -> OcrClient:
    return AzureOpenAIOcrClient(settings=get_settings())


@lru_cache()
def _document_extractor() -> DocumentExtractor:
    settings = get_settings()
    return DocumentExtractor(
        PageLayoutAnalyzer(settings),
        PageAssembler(_ocr_client(), settings),
        max_workers=settings.ocr_max_concurrency,
    )


@lru_cache()
def _confidence_calculator() -> ConfidenceCalculator:
    return ConfidenceCalculator(get_settings().confidence_low_threshold)


def get_create_session_handler() -> CreateSessionHandler:
    return CreateSessionHandler(_session_repository())


def get_run_extraction_handler() -> RunExtractionHandler:
    return RunExtractionHandler(_session_repository(), _document_extractor())


def get_run_mapping_handler() -> RunMappingHandler:
    return RunMappingHandler(_session_repository())


def get_review_field_handler() -> ReviewFieldHandler:
    return ReviewFieldHandler(_session_repository())


def get_run_validation_handler() -> RunValidationHandler:
    return RunValidationHandler(_session_repository(), SchemaValidator(get_settings().confidence_low_threshold))


def get_submit_workflow_handler() -> SubmitWorkflowHandler:
    return SubmitWorkflowHandler(_session_repository())


def get_session_status_handler() -> GetSessionStatusHandler:
    return GetSessionStatusHandler(_session_repository())


def get_list_low_confidence_fields_handler() -> ListLowConfidenceFieldsHandler:
    """Provide a low-confidence listing handler sharing the configured threshold."""
    return ListLowConfidenceFieldsHandler(_session_repository(), _confidence_calculator())


def clear_caches() -> None:
    for factory in (_session_repository, _ocr_client, _document_extractor, _confidence_calculator):
        factory.cache_clear()
