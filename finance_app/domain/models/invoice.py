"""
Invoice domain model.
Read-only snapshot of an invoice as the export pipeline sees it.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Any
from enum import Enum


TWO_PLACES = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Coerce a stored amount into a 2-decimal Decimal. Absent values become 0."""
    if value is None or value == "":
        return Decimal("0.00")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    else:
        amount = Decimal(str(value))
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """How much of an invoice has been paid."""
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


@dataclass(frozen=True)
class ClientSnapshot:
    """Client details denormalized onto an invoice at read time."""

    name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    """
    Invoice snapshot.

    Amounts are stored as Decimal with two places. ``tax_amount`` and
    ``total_amount`` are carried as read from storage; use
    ``BillingService.compute_invoice_totals`` to derive them from the
    subtotal and tax rate.
    """

    id: Optional[str]
    invoice_number: str
    title: str
    issue_date: Optional[date]
    due_date: Optional[date]
    amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Optional[Decimal]
    paid_amount: Decimal = Decimal("0.00")
    client: ClientSnapshot = ClientSnapshot()
    status: InvoiceStatus = InvoiceStatus.DRAFT
    payment_status: Optional[PaymentStatus] = None
    paid_date: Optional[date] = None
    currency: str = "IDR"
    description: Optional[str] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def balance(self) -> Decimal:
        """Raw total minus paid. Negative when overpaid; kept for audit."""
        return (self.total_amount or Decimal("0.00")) - self.paid_amount

    @property
    def remaining_amount(self) -> Decimal:
        """Balance floored at zero, as shown to users."""
        return max(self.balance, Decimal("0.00"))

    def is_past_due(self, as_of: date) -> bool:
        """Check whether the due date has passed on the given day."""
        return self.due_date is not None and self.due_date < as_of
