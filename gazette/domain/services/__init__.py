"""
Domain services for business logic that doesn't belong to a specific entity.

Page geometry (borders, tables, text zones), entity extraction, form mapping,
validation and confidence statistics.
"""
from .border_eliminator import BorderEliminator, BorderParams
from .confidence_calculator import ConfidenceCalculator, ConfidenceStatistics
from .entity_extractor import EntityExtractor
from .field_mapper import FieldMapper
from .language_detector import detect_language
from .metadata_extractor import MetadataExtractor
from .schema_validator import MappingValidator, SchemaValidator
from .table_detector import TableDetector, TableParams
from .text_zone_partitioner import TextZonePartitioner, ZoneParams

__all__ = [
    "BorderEliminator",
    "BorderParams",
    "ConfidenceCalculator",
    "ConfidenceStatistics",
    "EntityExtractor",
    "FieldMapper",
    "MappingValidator",
    "MetadataExtractor",
    "SchemaValidator",
    "TableDetector",
    "TableParams",
    "TextZonePartitioner",
    "ZoneParams",
    "detect_language",
]
