"""
Finance repository implementation using Supabase.
Reads invoices, payments and the stored aggregates the export pipeline consumes.
"""

import logging
from datetime import timedelta
from typing import Optional, List

from supabase import Client

from finance_app.domain.models.base import DateRange, EntityNotFoundError
from finance_app.domain.models.client import ClientSummary
from finance_app.domain.models.invoice import Invoice
from finance_app.domain.models.payment import Payment
from finance_app.domain.models.report import FinancialMetrics, MonthlyRevenuePoint
from finance_app.infrastructure.mappers import InvoiceMapper, PaymentMapper, ReportMapper
from finance_app.infrastructure.pagination import OffsetPagination, Page

logger = logging.getLogger(__name__)

PAYMENT_WITH_INVOICE = "*, invoices!inner(invoice_number, title, total_amount, clients!inner(name, company))"


class SupabaseFinanceRepository:
    """
    Supabase implementation of the finance read interfaces.

    The client is passed in by the caller so every query runs with the
    caller's row-level permissions.
    """

    def __init__(
        self,
        client: Client,
        default_currency: str = "IDR",
        pagination: Optional[OffsetPagination] = None
    ):
        self.client = client
        self.invoice_mapper = InvoiceMapper(default_currency)
        self.payment_mapper = PaymentMapper()
        self.report_mapper = ReportMapper()
        self.pagination = pagination or OffsetPagination()

    async def get_financial_metrics(self) -> FinancialMetrics:
        """Single row of the financial_metrics view."""
        response = self.client.table("financial_metrics").select("*").limit(1).execute()
        row = response.data[0] if response.data else None
        return self.report_mapper.metrics_to_domain(row)

    async def get_monthly_revenue(self, months_back: int = 12) -> List[MonthlyRevenuePoint]:
        response = self.client.rpc("get_monthly_revenue", {"months_back": months_back}).execute()
        return [self.report_mapper.monthly_to_domain(row) for row in response.data or []]

    async def get_top_clients(self, limit: int = 50) -> List[ClientSummary]:
        response = self.client.rpc("get_top_clients", {"limit_count": limit}).execute()
        return [self.report_mapper.client_to_domain(row) for row in response.data or []]

    async def list_invoices_in_range(self, date_range: DateRange) -> List[Invoice]:
        """
        Invoices created within the range, newest first.

        Both ends are whole days; an inverted range matches nothing.
        """
        if date_range.is_empty:
            logger.info(f"Empty invoice range {date_range.start} > {date_range.end}")
            return []

        response = (
            self.client.table("invoice_summary")
            .select("*")
            .gte("created_at", date_range.start.isoformat())
            .lt("created_at", (date_range.end + timedelta(days=1)).isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [self.invoice_mapper.row_to_domain(row) for row in response.data or []]

    async def list_payments_in_range(self, date_range: DateRange) -> List[Payment]:
        """Payments dated within the range, newest first."""
        if date_range.is_empty:
            logger.info(f"Empty payment range {date_range.start} > {date_range.end}")
            return []

        response = (
            self.client.table("payments")
            .select(PAYMENT_WITH_INVOICE)
            .gte("payment_date", date_range.start.isoformat())
            .lte("payment_date", date_range.end.isoformat())
            .order("payment_date", desc=True)
            .execute()
        )
        return [self.payment_mapper.row_to_domain(row) for row in response.data or []]

    async def get_invoice(self, invoice_id: str) -> Invoice:
        """
        Fetch one invoice.

        Raises:
            EntityNotFoundError: If no visible invoice has this id
        """
        response = (
            self.client.table("invoice_summary")
            .select("*")
            .eq("id", invoice_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise EntityNotFoundError("Invoice", invoice_id)
        return self.invoice_mapper.row_to_domain(response.data[0])

    async def search_invoices(
        self,
        status: Optional[str] = None,
        client: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None
    ) -> Page[Invoice]:
        """
        Filtered, paginated invoice listing.

        ``status`` "all" disables the status filter; ``client`` matches part
        of the client name; ``search`` matches number, title or client name.
        """
        query = (
            self.client.table("invoice_summary")
            .select("*", count="exact")
            .order("created_at", desc=True)
        )

        if status and status != "all":
            query = query.eq("status", status)

        if client:
            query = query.ilike("client_name", f"%{client}%")

        if search:
            query = query.or_(
                f"invoice_number.ilike.%{search}%,title.ilike.%{search}%,client_name.ilike.%{search}%"
            )

        start, end = self.pagination.row_range(page, limit)
        response = query.range(start, end).execute()

        invoices = [self.invoice_mapper.row_to_domain(row) for row in response.data or []]
        return self.pagination.build_page(invoices, response.count or 0, page, limit)

    async def search_payments(
        self,
        status: Optional[str] = None,
        method: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None
    ) -> Page[Payment]:
        """Filtered, paginated payment listing joined with invoice and client."""
        query = (
            self.client.table("payments")
            .select(PAYMENT_WITH_INVOICE, count="exact")
            .order("created_at", desc=True)
        )

        if status and status != "all":
            query = query.eq("status", status)

        if method and method != "all":
            query = query.eq("payment_method", method)

        if search:
            query = query.or_(
                f"payment_number.ilike.%{search}%,reference_number.ilike.%{search}%"
            )

        start, end = self.pagination.row_range(page, limit)
        response = query.range(start, end).execute()

        payments = [self.payment_mapper.row_to_domain(row) for row in response.data or []]
        return self.pagination.build_page(payments, response.count or 0, page, limit)
