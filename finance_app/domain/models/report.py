"""
Report domain models.
Report requests, aggregate metrics and the data bundles fed to the renderer.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Tuple
from enum import Enum

from finance_app.domain.models.base import DateRange, ValidationError
from finance_app.domain.models.client import ClientSummary
from finance_app.domain.models.invoice import Invoice
from finance_app.domain.models.payment import Payment


class ReportType(str, Enum):
    """Supported aggregate report views."""
    FINANCIAL_SUMMARY = "financial_summary"
    INVOICE_REPORT = "invoice_report"
    PAYMENT_REPORT = "payment_report"
    CLIENT_REPORT = "client_report"
    MONTHLY_ANALYSIS = "monthly_analysis"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Any) -> "ReportType":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("Invalid report type", "reportType")


class ExportFormat(str, Enum):
    """Byte encodings a document can be exported to."""
    PDF = "pdf"
    EXCEL = "excel"
    CSV = "csv"
    HTML = "html"

    @property
    def extension(self) -> str:
        return {
            ExportFormat.PDF: "pdf",
            ExportFormat.EXCEL: "xlsx",
            ExportFormat.CSV: "csv",
            ExportFormat.HTML: "html",
        }[self]

    @property
    def content_type(self) -> str:
        return {
            ExportFormat.PDF: "application/pdf",
            ExportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            ExportFormat.CSV: "text/csv",
            ExportFormat.HTML: "text/html; charset=utf-8",
        }[self]

    @property
    def is_tabular(self) -> bool:
        return self in (ExportFormat.CSV, ExportFormat.EXCEL)


# Formats accepted by the report export endpoint.
REPORT_EXPORT_FORMATS = (ExportFormat.CSV, ExportFormat.EXCEL, ExportFormat.PDF)

# Report types that have a tabular column layout.
TABULAR_REPORT_TYPES = (
    ReportType.INVOICE_REPORT,
    ReportType.PAYMENT_REPORT,
    ReportType.CLIENT_REPORT,
)


@dataclass(frozen=True)
class ReportRequest:
    """One export call: what to report on, how to encode it, and for which dates."""

    report_type: ReportType
    export_format: ExportFormat
    date_range: DateRange


@dataclass(frozen=True)
class FinancialMetrics:
    """Aggregate revenue figures across a set of invoices."""

    total_revenue: Decimal = Decimal("0.00")
    paid_revenue: Decimal = Decimal("0.00")
    pending_revenue: Decimal = Decimal("0.00")
    overdue_revenue: Decimal = Decimal("0.00")
    total_invoices: int = 0
    paid_count: int = 0

    @property
    def outstanding_revenue(self) -> Decimal:
        return max(self.total_revenue - self.paid_revenue, Decimal("0.00"))

    @property
    def unpaid_count(self) -> int:
        return max(self.total_invoices - self.paid_count, 0)


@dataclass(frozen=True)
class MonthlyRevenuePoint:
    """One month of the revenue/payments series."""

    month_year: str
    revenue: Decimal
    payments: Decimal


@dataclass(frozen=True)
class ReportBundle:
    """Everything one report needs, fetched up front and passed by value."""

    report_type: ReportType
    date_range: Optional[DateRange] = None
    metrics: Optional[FinancialMetrics] = None
    monthly: Tuple[MonthlyRevenuePoint, ...] = ()
    invoices: Tuple[Invoice, ...] = ()
    payments: Tuple[Payment, ...] = ()
    clients: Tuple[ClientSummary, ...] = ()
    currency: str = "IDR"
