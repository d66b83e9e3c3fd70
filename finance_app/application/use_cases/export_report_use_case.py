"""
Use case for exporting financial reports.
Collects the report data, renders it, encodes it and delivers the bytes.
"""

import logging
from datetime import date, timedelta
from typing import Any, Callable, Optional
from pydantic import ValidationError as PydanticValidationError

from finance_app.application.dto.export_dto import DateRangeDTO, ExportRequestDTO
from finance_app.domain.models.base import (
    DateRange, DomainException, RenderError, UnsupportedExportError, ValidationError
)
from finance_app.domain.models.report import (
    ExportFormat, ReportBundle, ReportRequest, ReportType,
    REPORT_EXPORT_FORMATS, TABULAR_REPORT_TYPES
)
from finance_app.domain.services.document_renderer import DocumentRenderer
from finance_app.infrastructure.export.delivery import DeliveryMechanism, DeliveryResult, DownloadDelivery
from finance_app.infrastructure.export.encoders import BaseEncoder, get_encoder
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository

logger = logging.getLogger(__name__)

# Period used when the request carries no date range.
DEFAULT_RANGE_DAYS = 30


class ExportReportUseCase:
    """Use case for exporting one report in one format."""

    def __init__(
        self,
        repository: SupabaseFinanceRepository,
        renderer: DocumentRenderer,
        delivery: Optional[DeliveryMechanism] = None,
        encoder_factory: Callable[[ExportFormat, str], BaseEncoder] = get_encoder,
        months_back: int = 12,
        top_clients_limit: int = 50,
        today: Callable[[], date] = date.today
    ):
        self.repository = repository
        self.renderer = renderer
        self.delivery = delivery or DownloadDelivery(today)
        self.encoder_factory = encoder_factory
        self.months_back = months_back
        self.top_clients_limit = top_clients_limit
        self.today = today

    def parse_request(self, request: ExportRequestDTO) -> ReportRequest:
        """
        Validate the raw request.

        Raises:
            ValidationError: Unknown report type, export format or malformed date range
            UnsupportedExportError: Tabular format asked for a report without columns
        """
        report_type = ReportType.parse(request.report_type)

        try:
            export_format = ExportFormat(request.export_type)
        except ValueError:
            raise ValidationError("Invalid export type", "type")
        if export_format not in REPORT_EXPORT_FORMATS:
            raise ValidationError("Invalid export type", "type")

        if export_format.is_tabular and report_type not in TABULAR_REPORT_TYPES:
            raise UnsupportedExportError(report_type.value, export_format.value)

        date_range = self.parse_date_range(request.date_range)

        return ReportRequest(report_type=report_type, export_format=export_format, date_range=date_range)

    def parse_date_range(self, raw: Any) -> DateRange:
        """Read a `{from, to}` body; a missing range means the last 30 days."""
        if raw is None:
            end = self.today()
            return DateRange(start=end - timedelta(days=DEFAULT_RANGE_DAYS), end=end)

        try:
            dto = DateRangeDTO.model_validate(raw)
        except PydanticValidationError:
            raise ValidationError("Invalid date range", "dateRange")
        return DateRange(start=dto.start, end=dto.end)

    async def execute(self, user_id: str, request: ExportRequestDTO) -> DeliveryResult:
        """
        Export a report.

        Raises:
            ValidationError: For an invalid request, before any data is read
            RenderError: If the document cannot be built or encoded
        """
        report_request = self.parse_request(request)
        report_type = report_request.report_type
        logger.info(
            f"User {user_id} exporting {report_type.value} as {report_request.export_format.value} "
            f"for {report_request.date_range.start} - {report_request.date_range.end}"
        )

        bundle = await self.collect(report_request)

        try:
            tree = self.renderer.render_report(bundle)
            encoder = self.encoder_factory(report_request.export_format, report_type.value)
            document = encoder.encode(tree)
        except DomainException:
            raise
        except Exception as e:
            logger.error(f"Rendering report {report_type.value} failed: {str(e)}", exc_info=True)
            raise RenderError(f"Failed to render report {report_type.value}") from e

        return await self.delivery.deliver(document)

    async def collect(self, report_request: ReportRequest) -> ReportBundle:
        """Fetch the records one report type needs."""
        report_type = report_request.report_type
        date_range = report_request.date_range
        currency = self.renderer.default_currency

        if report_type == ReportType.FINANCIAL_SUMMARY:
            metrics = await self.repository.get_financial_metrics()
            monthly = await self.repository.get_monthly_revenue(self.months_back)
            return ReportBundle(report_type, metrics=metrics, monthly=tuple(monthly), currency=currency)

        if report_type == ReportType.INVOICE_REPORT:
            invoices = await self.repository.list_invoices_in_range(date_range)
            return ReportBundle(report_type, date_range=date_range, invoices=tuple(invoices), currency=currency)

        if report_type == ReportType.PAYMENT_REPORT:
            payments = await self.repository.list_payments_in_range(date_range)
            return ReportBundle(report_type, date_range=date_range, payments=tuple(payments), currency=currency)

        if report_type == ReportType.CLIENT_REPORT:
            clients = await self.repository.get_top_clients(self.top_clients_limit)
            return ReportBundle(report_type, clients=tuple(clients), currency=currency)

        monthly = await self.repository.get_monthly_revenue(self.months_back)
        return ReportBundle(report_type, monthly=tuple(monthly), currency=currency)
