"""
Base value objects and exceptions for the domain layer.
Every error raised by the export pipeline derives from DomainException.
"""

from datetime import date
from typing import Optional, Any
from abc import ABC, abstractmethod
from dataclasses import dataclass


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)
        self.field = field


class MissingRequiredFieldError(ValidationError):
    """Raised when a record lacks a field the renderer cannot default."""

    def __init__(self, entity_type: str, field: str):
        super().__init__(
            f"{entity_type} is missing required field '{field}'",
            field=field,
            code="MISSING_REQUIRED_FIELD"
        )
        self.entity_type = entity_type


class UnsupportedExportError(ValidationError):
    """Raised for a report type / export format pair with no encoding."""

    def __init__(self, report_type: str, export_format: str):
        super().__init__(
            f"Export format '{export_format}' is not supported for report '{report_type}'",
            field="type",
            code="UNSUPPORTED_EXPORT"
        )
        self.report_type = report_type
        self.export_format = export_format


class AuthenticationError(DomainException):
    """Exception raised when the caller has no valid session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AUTHENTICATION_ERROR")


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class RenderError(DomainException):
    """Exception raised when a document cannot be built or encoded."""

    def __init__(self, message: str):
        super().__init__(message, "RENDER_ERROR")


class PopupBlockedError(DomainException):
    """Exception raised when a preview viewer could not be opened."""

    def __init__(self, message: str = "Pop-up blocked. Please allow pop-ups for this site."):
        super().__init__(message, "POPUP_BLOCKED")


class UploadError(DomainException):
    """Exception raised when a storage write fails."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message, "UPLOAD_ERROR")
        self.file_path = file_path


class MetadataWriteError(DomainException):
    """Exception raised when the uploaded file record cannot be saved."""

    def __init__(self, message: str):
        super().__init__(message, "METADATA_WRITE_ERROR")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Inclusive calendar date range.

    A range whose start lies after its end is accepted and simply matches
    no records.
    """

    start: date
    end: date

    def validate(self) -> None:
        """Validate range bounds."""
        if not isinstance(self.start, date) or not isinstance(self.end, date):
            raise ValidationError("Date range bounds must be dates", "dateRange")

    @property
    def is_empty(self) -> bool:
        """Check whether the range can match anything."""
        return self.start > self.end

    def contains(self, value: date) -> bool:
        """Check if a date falls inside the range (both ends included)."""
        return self.start <= value <= self.end
