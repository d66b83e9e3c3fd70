"""
Domain models for the financial document pipeline.
This module exports all domain records, value objects and exceptions.
"""

# Base classes and exceptions
from .base import (
    DomainException,
    ValidationError,
    MissingRequiredFieldError,
    UnsupportedExportError,
    AuthenticationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    RenderError,
    PopupBlockedError,
    UploadError,
    MetadataWriteError,
    ValueObject,
    DateRange
)

from .client import ClientSummary

from .invoice import (
    Invoice,
    InvoiceStatus,
    PaymentStatus,
    ClientSnapshot,
    to_money
)

from .payment import (
    Payment,
    PaymentMethod,
    PaymentRecordStatus
)

from .document import (
    DocumentTree,
    DocumentSection,
    DocumentField,
    SectionKind,
    Emphasis,
    ColumnKind,
    TableColumn,
    TableData,
    ChartSeries,
    ChartPoint
)

from .report import (
    ReportType,
    ExportFormat,
    ReportRequest,
    FinancialMetrics,
    MonthlyRevenuePoint,
    ReportBundle,
    REPORT_EXPORT_FORMATS,
    TABULAR_REPORT_TYPES
)

__all__ = [
    # Base classes
    "DomainException",
    "ValidationError",
    "MissingRequiredFieldError",
    "UnsupportedExportError",
    "AuthenticationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "RenderError",
    "PopupBlockedError",
    "UploadError",
    "MetadataWriteError",
    "ValueObject",
    "DateRange",

    # Client
    "ClientSummary",

    # Invoice
    "Invoice",
    "InvoiceStatus",
    "PaymentStatus",
    "ClientSnapshot",
    "to_money",

    # Payment
    "Payment",
    "PaymentMethod",
    "PaymentRecordStatus",

    # Document tree
    "DocumentTree",
    "DocumentSection",
    "DocumentField",
    "SectionKind",
    "Emphasis",
    "ColumnKind",
    "TableColumn",
    "TableData",
    "ChartSeries",
    "ChartPoint",

    # Report
    "ReportType",
    "ExportFormat",
    "ReportRequest",
    "FinancialMetrics",
    "MonthlyRevenuePoint",
    "ReportBundle",
    "REPORT_EXPORT_FORMATS",
    "TABULAR_REPORT_TYPES",
]
