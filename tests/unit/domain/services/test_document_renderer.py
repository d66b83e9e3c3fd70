"""
Unit tests for DocumentRenderer.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from finance_app.domain.models.base import DateRange, MissingRequiredFieldError
from finance_app.domain.models.client import ClientSummary
from finance_app.domain.models.document import Emphasis, SectionKind
from finance_app.domain.models.invoice import ClientSnapshot, InvoiceStatus
from finance_app.domain.models.report import ReportBundle, ReportType, MonthlyRevenuePoint, FinancialMetrics

GENERATED_AT = datetime(2026, 10, 19, 9, 30)

NBSP = " "


class TestRenderInvoice:
    """Test cases for invoice documents."""

    def test_full_invoice_section_order(self, renderer, invoice_factory):
        invoice = invoice_factory(
            description="Landing page and checkout flow",
            notes="Thank you for your business",
            terms="Net 30"
        )

        tree = renderer.render_invoice(invoice)

        assert tree.section_kinds == (
            SectionKind.HEADER,
            SectionKind.PARTIES,
            SectionKind.DETAILS,
            SectionKind.DESCRIPTION,
            SectionKind.FINANCIAL_SUMMARY,
            SectionKind.NOTES,
            SectionKind.FOOTER,
        )
        assert tree.document_type == "invoice"
        assert tree.reference == "INV-001"
        assert tree.entity_id == "inv-1"
        assert tree.generated_at == GENERATED_AT

    def test_optional_sections_are_omitted(self, renderer, invoice_factory):
        invoice = invoice_factory(tax_rate=Decimal("0"), tax_amount=Decimal("0.00"), total_amount=Decimal("1000000.00"))

        tree = renderer.render_invoice(invoice)

        assert SectionKind.DESCRIPTION not in tree.section_kinds
        assert SectionKind.NOTES not in tree.section_kinds
        summary = tree.section(SectionKind.FINANCIAL_SUMMARY)
        assert summary.field("tax") is None
        assert summary.field("paid") is None

    def test_header_fields(self, renderer, invoice_factory):
        tree = renderer.render_invoice(invoice_factory())
        header = tree.section(SectionKind.HEADER)

        assert header.title == "INVOICE"
        assert header.field("company").value == "Sepur Engineering Roblox"
        assert header.field("invoice_number").value == "#INV-001"
        assert header.field("status").value == "Sent"
        assert header.field("payment_status").value == "Unpaid"
        assert header.field("payment_status").emphasis == Emphasis.NEGATIVE

    def test_financial_summary_values(self, renderer, invoice_factory):
        tree = renderer.render_invoice(invoice_factory(paid_amount=Decimal("500000.00")))
        summary = tree.section(SectionKind.FINANCIAL_SUMMARY)

        assert summary.field("subtotal").value == f"Rp{NBSP}1.000.000"
        assert summary.field("tax").label == "Tax (11%)"
        assert summary.field("tax").value == f"Rp{NBSP}110.000"
        assert summary.field("total").value == f"Rp{NBSP}1.110.000"
        assert summary.field("total").highlight is True
        assert summary.field("paid").emphasis == Emphasis.POSITIVE

        balance = summary.field("balance_due")
        assert balance.value == f"Rp{NBSP}610.000"
        assert balance.emphasis == Emphasis.NEGATIVE
        assert balance.highlight is True

    def test_fully_paid_invoice_has_no_balance_due(self, renderer, invoice_factory):
        invoice = invoice_factory(
            status=InvoiceStatus.PAID,
            paid_amount=Decimal("1110000.00"),
            paid_date=date(2026, 10, 15)
        )

        tree = renderer.render_invoice(invoice)

        payment_status = tree.section(SectionKind.HEADER).field("payment_status")
        assert payment_status.value == "Fully Paid"
        assert payment_status.emphasis == Emphasis.POSITIVE
        assert tree.section(SectionKind.FINANCIAL_SUMMARY).field("balance_due") is None
        assert tree.section(SectionKind.DETAILS).field("paid_date").value == "15 Oktober 2026"

    def test_missing_client_name_falls_back(self, renderer, invoice_factory):
        tree = renderer.render_invoice(invoice_factory(client=ClientSnapshot()))
        parties = tree.section(SectionKind.PARTIES)

        assert parties.field("client_name").value == "N/A"
        assert parties.field("client_email") is None

    def test_missing_dates_render_placeholder(self, renderer, invoice_factory):
        tree = renderer.render_invoice(invoice_factory(issue_date=None, due_date=None))
        details = tree.section(SectionKind.DETAILS)

        assert details.field("issue_date").value == "N/A"
        assert details.field("due_date").value == "N/A"

    def test_missing_id_raises(self, renderer, invoice_factory):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            renderer.render_invoice(invoice_factory(id=None))
        assert exc_info.value.field == "id"

    def test_missing_total_raises(self, renderer, invoice_factory):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            renderer.render_invoice(invoice_factory(total_amount=None))
        assert exc_info.value.field == "total_amount"

    def test_footer(self, renderer, invoice_factory):
        footer = renderer.render_invoice(invoice_factory()).section(SectionKind.FOOTER)

        assert footer.field("generated_on").value == "Generated on 19 Oktober 2026 - Sepur Engineering Roblox"
        assert footer.field("caption").value == "Sepur Finance - Invoice #INV-001"

    def test_invoice_field_table(self, renderer, invoice_factory):
        tree = renderer.render_invoice(invoice_factory())
        rows = dict(tree.tabular.rows)

        assert tree.tabular.header == ("Field", "Value")
        assert len(tree.tabular.rows) == 20
        assert rows["Tax Rate"] == "11%"
        assert rows["Total Amount"] == Decimal("1110000.00")
        assert rows["Payment Status"] == "unpaid"

    def test_renders_are_independent(self, renderer, invoice_factory):
        first = renderer.render_invoice(invoice_factory(id="a", invoice_number="INV-A"))
        second = renderer.render_invoice(invoice_factory(id="b", invoice_number="INV-B", paid_amount=Decimal("1.00")))
        again = renderer.render_invoice(invoice_factory(id="a", invoice_number="INV-A"))

        assert first == again
        assert second.reference == "INV-B"
        assert first.section(SectionKind.FINANCIAL_SUMMARY).field("paid") is None


class TestRenderReport:
    """Test cases for report documents."""

    def test_invoice_report_table(self, renderer, invoice_factory):
        bundle = ReportBundle(
            report_type=ReportType.INVOICE_REPORT,
            date_range=DateRange(date(2026, 10, 1), date(2026, 10, 31)),
            invoices=(invoice_factory(id="a"), invoice_factory(id="b", invoice_number="INV-002")),
        )

        tree = renderer.render_report(bundle)

        assert tree.section_kinds == (
            SectionKind.HEADER, SectionKind.KEY_METRICS, SectionKind.TABLE, SectionKind.FOOTER
        )
        assert tree.tabular.header == (
            "Invoice Number", "Title", "Client", "Amount", "Tax Amount", "Total Amount",
            "Paid Amount", "Remaining", "Status", "Payment Status", "Issue Date", "Due Date",
        )
        assert len(tree.tabular.rows) == 2
        assert tree.title == "Invoice Report"
        assert tree.section(SectionKind.HEADER).field("period").value == "1 Oktober 2026 - 31 Oktober 2026"
        metrics = tree.section(SectionKind.KEY_METRICS)
        assert metrics.field("total_revenue").value == f"Rp{NBSP}2.220.000"
        assert metrics.field("total_invoices").value == "2"

    def test_empty_invoice_report_keeps_header(self, renderer):
        tree = renderer.render_report(ReportBundle(report_type=ReportType.INVOICE_REPORT))

        assert tree.tabular.rows == ()
        assert len(tree.tabular.header) == 12
        assert SectionKind.TABLE not in tree.section_kinds

    def test_payment_report(self, renderer, payment_factory):
        tree = renderer.render_report(ReportBundle(
            report_type=ReportType.PAYMENT_REPORT,
            payments=(payment_factory(),)
        ))

        assert tree.tabular.header == (
            "Payment Number", "Invoice Number", "Client", "Amount",
            "Payment Method", "Payment Date", "Reference Number", "Status",
        )
        assert tree.tabular.rows[0][4] == "bank_transfer"
        assert tree.section(SectionKind.KEY_METRICS).field("payment_count").value == "1"

    def test_financial_summary_has_chart_and_no_tabular(self, renderer):
        bundle = ReportBundle(
            report_type=ReportType.FINANCIAL_SUMMARY,
            metrics=FinancialMetrics(
                total_revenue=Decimal("1000.00"), paid_revenue=Decimal("250.00"),
                total_invoices=4, paid_count=1
            ),
            monthly=(
                MonthlyRevenuePoint("2026-09", Decimal("400.00"), Decimal("100.00")),
                MonthlyRevenuePoint("2026-10", Decimal("600.00"), Decimal("150.00")),
            )
        )

        tree = renderer.render_report(bundle)

        assert tree.tabular is None
        assert SectionKind.CHART in tree.section_kinds
        metrics = tree.section(SectionKind.KEY_METRICS)
        assert metrics.field("collection_rate").value == "25%"
        assert metrics.field("outstanding").value == f"Rp{NBSP}750 (3 invoices pending)"
        chart = tree.section(SectionKind.CHART).chart
        assert [point.label for point in chart.points] == ["Sep 2026", "Okt 2026"]
        assert chart.max_value == Decimal("600.00")

    def test_client_report_chart_is_limited(self, renderer):
        clients = tuple(
            ClientSummary(
                client_name=f"Client with a long name {index}",
                client_company=None,
                total_revenue=Decimal(1000 - index),
                invoice_count=1,
                paid_amount=Decimal("0")
            )
            for index in range(12)
        )

        tree = renderer.render_report(ReportBundle(report_type=ReportType.CLIENT_REPORT, clients=clients))

        chart = tree.section(SectionKind.CHART).chart
        assert len(chart.points) == 10
        assert chart.points[0].label == "Client with a l..."
        assert len(tree.tabular.rows) == 12
        assert tree.section(SectionKind.KEY_METRICS).field("client_count").value == "12"

    def test_monthly_analysis_is_visual_only(self, renderer):
        bundle = ReportBundle(
            report_type=ReportType.MONTHLY_ANALYSIS,
            monthly=(MonthlyRevenuePoint("2026-10", Decimal("600.00"), Decimal("150.00")),)
        )

        tree = renderer.render_report(bundle)

        assert tree.tabular is None
        assert tree.section(SectionKind.TABLE).table.rows[0][0] == "Okt 2026"
        assert tree.section(SectionKind.FOOTER).field("caption").value == "Sepur Finance - Monthly Analysis"
