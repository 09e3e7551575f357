"""Domain entities package"""

from .border_region import BorderRegion
from .extracted_entity import (
    AnnexeEntity,
    ArticleEntity,
    DateEntity,
    ExtractedEntity,
    InstitutionEntity,
    NumberEntity,
    PublicationEntity,
    ReferenceEntity,
    SignatoryEntity,
)
from .extraction_result import ExtractionResult, JournalMetadata
from .journal_page import JournalPage, PageReport
from .line import Line, Orientation
from .mapped_field import MappedField, MappingAction, MappingActionType
from .mapping_result import MappingResult
from .page_layout import PageLayout
from .pipeline_session import PipelineSession
from .table_region import TableCell, TableRegion
from .text_zone import TextZone
from .validation_report import Diagnostic, Severity, ValidationReport
from .workflow_decision import WorkflowDecision, WorkflowStatus

__all__ = [
    "AnnexeEntity",
    "ArticleEntity",
    "BorderRegion",
    "DateEntity",
    "Diagnostic",
    "ExtractedEntity",
    "ExtractionResult",
    "InstitutionEntity",
    "JournalMetadata",
    "JournalPage",
    "Line",
    "MappedField",
    "MappingAction",
    "MappingActionType",
    "MappingResult",
    "NumberEntity",
    "Orientation",
    "PageLayout",
    "PageReport",
    "PipelineSession",
    "PublicationEntity",
    "ReferenceEntity",
    "Severity",
    "SignatoryEntity",
    "TableCell",
    "TableRegion",
    "TextZone",
    "ValidationReport",
    "WorkflowDecision",
    "WorkflowStatus",
]
