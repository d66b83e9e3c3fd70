"""
Payment DTOs for API responses.
"""

from typing import Optional
from datetime import date
from decimal import Decimal

from finance_app.application.dto.base_dto import ResponseDTO, ListResponseDTO
from finance_app.domain.models.payment import Payment


class PaymentResponseDTO(ResponseDTO):
    id: Optional[str] = None
    payment_number: str
    invoice_id: Optional[str] = None
    invoice_number: Optional[str] = None
    client_name: Optional[str] = None
    client_company: Optional[str] = None
    amount: Decimal
    payment_method: str
    payment_date: Optional[date] = None
    status: str
    reference_number: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentResponseDTO":
        return cls(
            id=payment.id,
            payment_number=payment.payment_number,
            invoice_id=payment.invoice_id,
            invoice_number=payment.invoice_number,
            client_name=payment.client_name,
            client_company=payment.client_company,
            amount=payment.amount,
            payment_method=payment.payment_method.value,
            payment_date=payment.payment_date,
            status=payment.status.value,
            reference_number=payment.reference_number,
            notes=payment.notes
        )


class PaymentListResponseDTO(ListResponseDTO[PaymentResponseDTO]):
    """Paginated payment listing."""
    pass
