"""
Shared fixtures: invoice and payment snapshots and a renderer with a fixed clock.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from finance_app.domain.models.invoice import Invoice, ClientSnapshot, InvoiceStatus
from finance_app.domain.models.payment import Payment, PaymentMethod, PaymentRecordStatus
from finance_app.domain.services.document_renderer import DocumentRenderer

GENERATED_AT = datetime(2026, 10, 19, 9, 30)


@pytest.fixture
def invoice_factory():
    """Build invoices with sensible defaults; keyword arguments override fields."""

    def build(**overrides) -> Invoice:
        values = dict(
            id="inv-1",
            invoice_number="INV-001",
            title="Website redesign",
            issue_date=date(2026, 10, 1),
            due_date=date(2026, 10, 31),
            amount=Decimal("1000000.00"),
            tax_rate=Decimal("11.00"),
            tax_amount=Decimal("110000.00"),
            total_amount=Decimal("1110000.00"),
            paid_amount=Decimal("0.00"),
            client=ClientSnapshot(name="PT Maju Jaya", company="Maju Group", email="billing@maju.co.id"),
            status=InvoiceStatus.SENT,
        )
        values.update(overrides)
        return Invoice(**values)

    return build


@pytest.fixture
def payment_factory():
    """Build payments with sensible defaults; keyword arguments override fields."""

    def build(**overrides) -> Payment:
        values = dict(
            id="pay-1",
            payment_number="PAY-001",
            invoice_id="inv-1",
            amount=Decimal("500000.00"),
            payment_method=PaymentMethod.BANK_TRANSFER,
            payment_date=date(2026, 10, 10),
            status=PaymentRecordStatus.COMPLETED,
            invoice_number="INV-001",
            client_name="PT Maju Jaya",
            client_company="Maju Group",
            reference_number="TRX-889",
        )
        values.update(overrides)
        return Payment(**values)

    return build


@pytest.fixture
def renderer():
    """Renderer whose footer timestamp is always GENERATED_AT."""
    return DocumentRenderer(
        company_name="Sepur Engineering Roblox",
        product_name="Sepur Finance",
        default_currency="IDR",
        clock=lambda: GENERATED_AT
    )
