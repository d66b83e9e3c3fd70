"""
Invoice mapper for converting invoice_summary rows into domain records.
"""

from typing import Any, Dict, Optional

from finance_app.domain.models.invoice import (
    Invoice, ClientSnapshot, InvoiceStatus, PaymentStatus, to_money
)
from finance_app.infrastructure.mappers.values import parse_optional_date, parse_optional_datetime


class InvoiceMapper:
    """Maps invoice_summary rows to Invoice snapshots, applying documented defaults."""

    def __init__(self, default_currency: str = "IDR"):
        self.default_currency = default_currency

    def row_to_domain(self, row: Dict[str, Any]) -> Invoice:
        """Convert a database row to an Invoice."""
        total = row.get("total_amount")
        return Invoice(
            id=str(row["id"]) if row.get("id") is not None else None,
            invoice_number=row.get("invoice_number") or "",
            title=row.get("title") or "",
            description=row.get("description"),
            client=ClientSnapshot(
                name=row.get("client_name"),
                company=row.get("client_company"),
                email=row.get("client_email")
            ),
            issue_date=parse_optional_date(row.get("issue_date")),
            due_date=parse_optional_date(row.get("due_date")),
            paid_date=parse_optional_date(row.get("paid_date")),
            status=self._status(row.get("status")),
            payment_status=self._payment_status(row.get("payment_status")),
            amount=to_money(row.get("amount")),
            tax_rate=to_money(row.get("tax_rate")),
            tax_amount=to_money(row.get("tax_amount")),
            total_amount=to_money(total) if total is not None else None,
            paid_amount=to_money(row.get("paid_amount")),
            currency=row.get("currency") or self.default_currency,
            notes=row.get("notes"),
            terms=row.get("terms"),
            created_at=parse_optional_datetime(row.get("created_at"))
        )

    def _status(self, value: Optional[str]) -> InvoiceStatus:
        return InvoiceStatus(value) if value else InvoiceStatus.DRAFT

    def _payment_status(self, value: Optional[str]) -> Optional[PaymentStatus]:
        return PaymentStatus(value) if value else None
