"""
Listing use cases for invoices and payments.
"""

from typing import Optional

from finance_app.application.dto.invoice_dto import InvoiceListResponseDTO, InvoiceResponseDTO
from finance_app.application.dto.payment_dto import PaymentListResponseDTO, PaymentResponseDTO
from finance_app.domain.services.billing_service import BillingService
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository


class ListInvoicesUseCase:
    """Use case for the filtered invoice listing."""

    def __init__(self, repository: SupabaseFinanceRepository, billing_service: Optional[BillingService] = None):
        self.repository = repository
        self.billing = billing_service or BillingService()

    async def execute(
        self,
        status: Optional[str] = None,
        client: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None
    ) -> InvoiceListResponseDTO:
        result = await self.repository.search_invoices(status, client, search, page, limit)
        items = [
            InvoiceResponseDTO.from_domain(invoice, self.billing.resolve_payment_status(invoice))
            for invoice in result.items
        ]
        return InvoiceListResponseDTO.from_metadata(items, result.metadata)


class ListPaymentsUseCase:
    """Use case for the filtered payment listing."""

    def __init__(self, repository: SupabaseFinanceRepository):
        self.repository = repository

    async def execute(
        self,
        status: Optional[str] = None,
        method: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None
    ) -> PaymentListResponseDTO:
        result = await self.repository.search_payments(status, method, search, page, limit)
        items = [PaymentResponseDTO.from_domain(payment) for payment in result.items]
        return PaymentListResponseDTO.from_metadata(items, result.metadata)
