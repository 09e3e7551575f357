"""
Domain Value Objects

Immutable value objects that encapsulate domain concepts with validation.
"""
from .confidence import Confidence
from .bounding_box import BoundingBox
from .entity_type import Calendar, EntityType, NumberScope, PublicationKind
from .form_schema import (
    FieldKind,
    FieldSelector,
    FormFieldDefinition,
    FormSchema,
    FormSchemaRegistry,
    FormType,
)
from .language import Language, LanguageHint
from .notification import Notification, NotificationLevel
from .ocr_result import OcrResult
from .pipeline_stage import PipelineStage

__all__ = [
    'Confidence',
    'BoundingBox',
    'Calendar',
    'EntityType',
    'NumberScope',
    'PublicationKind',
    'FieldKind',
    'FieldSelector',
    'FormFieldDefinition',
    'FormSchema',
    'FormSchemaRegistry',
    'FormType',
    'Language',
    'LanguageHint',
    'Notification',
    'NotificationLevel',
    'OcrResult',
    'PipelineStage',
]
