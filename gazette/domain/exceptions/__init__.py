"""Domain exceptions."""


class DomainException(Exception):
    """Base exception for domain layer errors."""
    pass


class RepositoryError(DomainException):
    """Exception raised when repository operations fail."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class EntityNotFoundError(RepositoryError):
    """Exception raised when an entity is not found in the repository."""

    def __init__(self, entity_type: str, entity_id: str, *, message: str | None = None):
        final_message = message or f"{entity_type} not found: {entity_id}"
        super().__init__(final_message)
        self.entity_type = entity_type
        self.entity_id = entity_id


class EntityValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, entity_type: str, errors: dict):
        message = f"Validation failed for {entity_type}: {errors}"
        super().__init__(message)
        self.entity_type = entity_type
        self.errors = errors


class GeometryError(DomainException):
    """Raised when a page raster cannot be analysed (empty, zero-size, wrong shape)."""

    def __init__(self, message: str, page_number: int | None = None):
        super().__init__(message)
        self.page_number = page_number


class ExtractionFailure(DomainException):
    """Raised by the OCR collaborator when a region could not be recognized."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class ExtractionTimeout(ExtractionFailure):
    """Raised when an OCR call exceeds its time allowance."""


class DocumentExtractionError(DomainException):
    """Raised when no page of a document could be assembled."""

    def __init__(self, message: str, page_reports: list | None = None):
        super().__init__(message)
        self.page_reports = list(page_reports or [])


class UnknownFormType(DomainException):
    """Raised when a mapping is requested for a form type outside the fixed set."""

    def __init__(self, form_type: str):
        super().__init__(f"Unknown form type: {form_type!r}")
        self.form_type = form_type


class StageOrderViolation(DomainException):
    """Raised when a pipeline stage is entered before its predecessor has a result."""

    def __init__(self, stage: str, missing: str):
        super().__init__(f"Stage '{stage}' requires a result from '{missing}'")
        self.stage = stage
        self.missing = missing



class ConfigurationError(DomainException):
    """Raised when a required setting is missing or unusable."""

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


__all__ = [
    "DomainException",
    "RepositoryError",
    "EntityNotFoundError",
    "EntityValidationError",
    "GeometryError",
    "ExtractionFailure",
    "ExtractionTimeout",
    "DocumentExtractionError",
    "UnknownFormType",
    "StageOrderViolation",
    "ConfigurationError",
]
