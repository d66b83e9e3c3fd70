"""
Unit tests for the row mappers.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from finance_app.domain.models.invoice import InvoiceStatus, PaymentStatus
from finance_app.domain.models.payment import PaymentMethod, PaymentRecordStatus
from finance_app.infrastructure.mappers import InvoiceMapper, PaymentMapper, ReportMapper


class TestInvoiceMapper:
    """Test cases for invoice_summary rows."""

    def test_full_row(self):
        row = {
            "id": "inv-1",
            "invoice_number": "INV-001",
            "title": "Website redesign",
            "client_name": "PT Maju Jaya",
            "client_email": "billing@maju.co.id",
            "issue_date": "2026-10-01",
            "due_date": "2026-10-31",
            "status": "sent",
            "payment_status": "partial",
            "amount": 1000000,
            "tax_rate": 11,
            "tax_amount": "110000.00",
            "total_amount": 1110000.0,
            "paid_amount": "500000",
            "currency": "USD",
            "created_at": "2026-10-01T08:00:00Z",
        }

        invoice = InvoiceMapper().row_to_domain(row)

        assert invoice.id == "inv-1"
        assert invoice.client.name == "PT Maju Jaya"
        assert invoice.client.company is None
        assert invoice.issue_date == date(2026, 10, 1)
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.payment_status == PaymentStatus.PARTIAL
        assert invoice.total_amount == Decimal("1110000.00")
        assert invoice.paid_amount == Decimal("500000.00")
        assert invoice.currency == "USD"
        assert invoice.created_at.year == 2026

    def test_defaults_for_missing_values(self):
        invoice = InvoiceMapper(default_currency="IDR").row_to_domain({"id": 7})

        assert invoice.id == "7"
        assert invoice.invoice_number == ""
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.payment_status is None
        assert invoice.total_amount is None
        assert invoice.paid_amount == Decimal("0.00")
        assert invoice.currency == "IDR"
        assert invoice.issue_date is None

    def test_trimmed_fractional_seconds(self):
        invoice = InvoiceMapper().row_to_domain({
            "id": 1,
            "invoice_number": "INV-1",
            "total_amount": 100,
            "created_at": "2026-10-19T10:00:00.12345+00:00",
            "paid_date": "2026-10-20T08:15:30.5+07:00",
        })

        assert invoice.created_at == datetime(2026, 10, 19, 10, 0, 0, 123450, tzinfo=timezone.utc)
        assert invoice.paid_date == date(2026, 10, 20)

    def test_unparseable_timestamp_raises(self):
        with pytest.raises(ValueError):
            InvoiceMapper().row_to_domain({"id": 1, "created_at": "yesterday"})


class TestPaymentMapper:
    """Test cases for payment rows joined with invoices."""

    def test_nested_join(self):
        row = {
            "id": "pay-1",
            "payment_number": "PAY-001",
            "invoice_id": "inv-1",
            "amount": "250000",
            "payment_method": "e_wallet",
            "payment_date": "2026-10-10",
            "status": "pending",
            "invoices": {
                "invoice_number": "INV-001",
                "clients": {"name": "PT Maju Jaya", "company": "Maju Group"},
            },
        }

        payment = PaymentMapper().row_to_domain(row)

        assert payment.amount == Decimal("250000.00")
        assert payment.payment_method == PaymentMethod.E_WALLET
        assert payment.status == PaymentRecordStatus.PENDING
        assert payment.invoice_number == "INV-001"
        assert payment.client_company == "Maju Group"

    def test_missing_join(self):
        payment = PaymentMapper().row_to_domain({"id": "pay-2", "amount": 10})

        assert payment.invoice_number is None
        assert payment.client_name is None
        assert payment.payment_method == PaymentMethod.OTHER


class TestReportMapper:
    """Test cases for aggregate rows."""

    def test_missing_metrics_row_is_zero(self):
        metrics = ReportMapper().metrics_to_domain(None)

        assert metrics.total_revenue == Decimal("0.00")
        assert metrics.total_invoices == 0

    def test_metrics_row(self):
        metrics = ReportMapper().metrics_to_domain({
            "total_revenue": "5000000",
            "paid_revenue": 2000000,
            "total_invoices": 10,
            "paid_count": 4,
        })

        assert metrics.paid_revenue == Decimal("2000000.00")
        assert metrics.unpaid_count == 6

    def test_client_without_name(self):
        client = ReportMapper().client_to_domain({"total_revenue": 100, "invoice_count": "3"})

        assert client.client_name == "N/A"
        assert client.invoice_count == 3
