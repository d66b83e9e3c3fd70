"""
Unit tests for the tabular encoders.
"""

import csv
import io
import pytest
from datetime import date, datetime
from decimal import Decimal

from finance_app.domain.models.base import UnsupportedExportError
from finance_app.domain.models.invoice import ClientSnapshot
from finance_app.domain.models.report import ReportBundle, ReportType, ExportFormat
from finance_app.infrastructure.export.encoders import CSVEncoder, ExcelEncoder, csv_cell, get_encoder


def read_rows(content: bytes):
    return list(csv.reader(io.StringIO(content.decode("utf-8"))))


class TestCsvCell:
    """Test cases for raw cell values."""

    def test_amounts_are_unformatted(self):
        assert csv_cell(Decimal("1110000.00")) == "1110000"
        assert csv_cell(Decimal("10.50")) == "10.50"
        assert csv_cell(3) == "3"

    def test_dates_are_iso(self):
        assert csv_cell(date(2026, 10, 19)) == "2026-10-19"
        assert csv_cell(datetime(2026, 10, 19, 8, 0)) == "2026-10-19"

    def test_empty_values(self):
        assert csv_cell(None) == ""
        assert csv_cell("") == ""


class TestCSVEncoder:
    """Test cases for CSVEncoder."""

    def test_invoice_report_header_and_rows(self, renderer, invoice_factory):
        tree = renderer.render_report(ReportBundle(
            report_type=ReportType.INVOICE_REPORT,
            invoices=(invoice_factory(),)
        ))

        rows = read_rows(CSVEncoder().encode_bytes(tree))

        assert rows[0] == [
            "Invoice Number", "Title", "Client", "Amount", "Tax Amount", "Total Amount",
            "Paid Amount", "Remaining", "Status", "Payment Status", "Issue Date", "Due Date",
        ]
        assert rows[1] == [
            "INV-001", "Website redesign", "PT Maju Jaya", "1000000", "110000", "1110000",
            "0", "1110000", "sent", "unpaid", "2026-10-01", "2026-10-31",
        ]

    def test_empty_report_is_header_only(self, renderer):
        tree = renderer.render_report(ReportBundle(report_type=ReportType.PAYMENT_REPORT))

        content = CSVEncoder().encode_bytes(tree)

        assert content == (
            b"Payment Number,Invoice Number,Client,Amount,Payment Method,"
            b"Payment Date,Reference Number,Status\n"
        )

    def test_special_characters_survive_parsing(self, renderer, invoice_factory):
        title = 'Design, "phase 1"\nand handover'
        tree = renderer.render_report(ReportBundle(
            report_type=ReportType.INVOICE_REPORT,
            invoices=(invoice_factory(title=title, client=ClientSnapshot(name="Café Ünïcode")),)
        ))

        content = CSVEncoder().encode_bytes(tree)
        rows = read_rows(content)

        assert '"Design, ""phase 1""\nand handover"' in content.decode("utf-8")
        assert rows[1][1] == title
        assert rows[1][2] == "Café Ünïcode"
        assert len(rows) == 2

    def test_missing_client_is_empty_cell(self, renderer, invoice_factory):
        tree = renderer.render_report(ReportBundle(
            report_type=ReportType.INVOICE_REPORT,
            invoices=(invoice_factory(client=ClientSnapshot()),)
        ))

        rows = read_rows(CSVEncoder().encode_bytes(tree))

        assert rows[1][2] == ""

    def test_visual_only_report_is_rejected(self, renderer):
        tree = renderer.render_report(ReportBundle(report_type=ReportType.FINANCIAL_SUMMARY))

        with pytest.raises(UnsupportedExportError) as exc_info:
            CSVEncoder().encode(tree)
        assert exc_info.value.report_type == "financial_summary"
        assert exc_info.value.export_format == "csv"

    def test_invoice_fields_table(self, renderer, invoice_factory):
        rows = read_rows(CSVEncoder().encode_bytes(renderer.render_invoice(invoice_factory())))

        assert rows[0] == ["Field", "Value"]
        assert ["Total Amount", "1110000"] in rows
        assert ["Tax Rate", "11%"] in rows
        assert ["Paid Date", ""] in rows


class TestExcelEncoder:
    """Test cases for the spreadsheet-typed encoder."""

    def test_same_bytes_as_csv(self, renderer, invoice_factory):
        tree = renderer.render_report(ReportBundle(
            report_type=ReportType.INVOICE_REPORT,
            invoices=(invoice_factory(),)
        ))

        excel = ExcelEncoder().encode(tree)
        plain = CSVEncoder().encode(tree)

        assert excel.content == plain.content
        assert excel.content_type == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        assert excel.filename(date(2026, 10, 19)) == "invoice_report_2026-10-19.xlsx"
        assert plain.filename(date(2026, 10, 19)) == "invoice_report_2026-10-19.csv"


class TestGetEncoder:
    """Test cases for encoder selection."""

    def test_tabular_formats(self):
        assert isinstance(get_encoder(ExportFormat.CSV), CSVEncoder)
        assert isinstance(get_encoder(ExportFormat.EXCEL), ExcelEncoder)

    def test_unknown_format_is_rejected(self):
        with pytest.raises(UnsupportedExportError):
            get_encoder("docx", "invoice")
