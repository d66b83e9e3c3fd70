"""
Invoice DTOs for API responses.
"""

from typing import Optional
from datetime import date
from decimal import Decimal

from finance_app.application.dto.base_dto import ResponseDTO, ListResponseDTO
from finance_app.domain.models.invoice import Invoice, PaymentStatus


class InvoiceResponseDTO(ResponseDTO):
    """Invoice summary row as returned by the listing endpoint."""

    id: Optional[str] = None
    invoice_number: str
    title: str
    client_name: Optional[str] = None
    client_company: Optional[str] = None
    client_email: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    status: str
    payment_status: str
    amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Optional[Decimal] = None
    paid_amount: Decimal
    remaining_amount: Decimal
    currency: str

    @classmethod
    def from_domain(cls, invoice: Invoice, payment_status: PaymentStatus) -> "InvoiceResponseDTO":
        """Create DTO from an invoice and its derived payment status."""
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            title=invoice.title,
            client_name=invoice.client.name,
            client_company=invoice.client.company,
            client_email=invoice.client.email,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            paid_date=invoice.paid_date,
            status=invoice.status.value,
            payment_status=payment_status.value,
            amount=invoice.amount,
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            remaining_amount=invoice.remaining_amount,
            currency=invoice.currency
        )


class InvoiceListResponseDTO(ListResponseDTO[InvoiceResponseDTO]):
    """Paginated invoice listing."""
    pass
