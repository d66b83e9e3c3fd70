"""
Payment mapper for converting payment rows (joined with their invoice and client).
"""

from typing import Any, Dict

from finance_app.domain.models.invoice import to_money
from finance_app.domain.models.payment import Payment, PaymentMethod, PaymentRecordStatus
from finance_app.infrastructure.mappers.values import parse_optional_date


class PaymentMapper:
    """Maps payments rows with an embedded ``invoices(invoice_number, clients(...))`` join."""

    def row_to_domain(self, row: Dict[str, Any]) -> Payment:
        invoice = row.get("invoices") or {}
        client = invoice.get("clients") or {}
        return Payment(
            id=str(row["id"]) if row.get("id") is not None else None,
            payment_number=row.get("payment_number") or "",
            invoice_id=str(row["invoice_id"]) if row.get("invoice_id") is not None else None,
            amount=to_money(row.get("amount")),
            payment_method=PaymentMethod(row.get("payment_method") or PaymentMethod.OTHER.value),
            payment_date=parse_optional_date(row.get("payment_date")),
            status=PaymentRecordStatus(row.get("status") or PaymentRecordStatus.COMPLETED.value),
            invoice_number=invoice.get("invoice_number"),
            client_name=client.get("name"),
            client_company=client.get("company"),
            reference_number=row.get("reference_number"),
            notes=row.get("notes")
        )
