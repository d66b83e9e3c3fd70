"""
Payment domain model.
A recorded transaction reducing an invoice's outstanding balance.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
from enum import Enum


class PaymentMethod(str, Enum):
    """Payment method."""
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    E_WALLET = "e_wallet"
    CHECK = "check"
    OTHER = "other"


class PaymentRecordStatus(str, Enum):
    """Processing status of a single payment."""
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Payment:
    """Payment snapshot joined with its invoice number and client."""

    id: Optional[str]
    payment_number: str
    invoice_id: Optional[str]
    amount: Decimal
    payment_method: PaymentMethod
    payment_date: Optional[date]
    status: PaymentRecordStatus = PaymentRecordStatus.COMPLETED
    invoice_number: Optional[str] = None
    client_name: Optional[str] = None
    client_company: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentRecordStatus.COMPLETED
