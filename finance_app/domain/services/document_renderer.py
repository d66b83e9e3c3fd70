"""
Document renderer.
Shapes an invoice or a report bundle into a format-neutral DocumentTree.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from finance_app.domain.models.base import MissingRequiredFieldError
from finance_app.domain.models.client import ClientSummary
from finance_app.domain.models.document import (
    ChartPoint,
    ChartSeries,
    ColumnKind,
    DocumentField,
    DocumentSection,
    DocumentTree,
    Emphasis,
    SectionKind,
    TableColumn,
    TableData,
)
from finance_app.domain.models.invoice import Invoice, InvoiceStatus, PaymentStatus
from finance_app.domain.models.payment import Payment
from finance_app.domain.models.report import FinancialMetrics, MonthlyRevenuePoint, ReportBundle, ReportType
from finance_app.domain.services.billing_service import BillingService
from finance_app.domain.services.formatting import (
    NOT_AVAILABLE,
    format_currency,
    format_date,
    format_month,
    format_percentage,
)


INVOICE_STATUS_DISPLAY = {
    InvoiceStatus.DRAFT: ("Draft", Emphasis.NEUTRAL),
    InvoiceStatus.SENT: ("Sent", Emphasis.NEUTRAL),
    InvoiceStatus.PAID: ("Paid", Emphasis.POSITIVE),
    InvoiceStatus.OVERDUE: ("Overdue", Emphasis.NEGATIVE),
    InvoiceStatus.CANCELLED: ("Cancelled", Emphasis.NEGATIVE),
}

PAYMENT_STATUS_DISPLAY = {
    PaymentStatus.UNPAID: ("Unpaid", Emphasis.NEGATIVE),
    PaymentStatus.PARTIAL: ("Partial", Emphasis.WARNING),
    PaymentStatus.PAID: ("Fully Paid", Emphasis.POSITIVE),
}

INVOICE_REPORT_COLUMNS = (
    TableColumn("Invoice Number"),
    TableColumn("Title"),
    TableColumn("Client"),
    TableColumn("Amount", ColumnKind.CURRENCY),
    TableColumn("Tax Amount", ColumnKind.CURRENCY),
    TableColumn("Total Amount", ColumnKind.CURRENCY),
    TableColumn("Paid Amount", ColumnKind.CURRENCY),
    TableColumn("Remaining", ColumnKind.CURRENCY),
    TableColumn("Status"),
    TableColumn("Payment Status"),
    TableColumn("Issue Date", ColumnKind.DATE),
    TableColumn("Due Date", ColumnKind.DATE),
)

PAYMENT_REPORT_COLUMNS = (
    TableColumn("Payment Number"),
    TableColumn("Invoice Number"),
    TableColumn("Client"),
    TableColumn("Amount", ColumnKind.CURRENCY),
    TableColumn("Payment Method"),
    TableColumn("Payment Date", ColumnKind.DATE),
    TableColumn("Reference Number"),
    TableColumn("Status"),
)

CLIENT_REPORT_COLUMNS = (
    TableColumn("Client Name"),
    TableColumn("Company"),
    TableColumn("Total Revenue", ColumnKind.CURRENCY),
    TableColumn("Invoice Count", ColumnKind.NUMBER),
    TableColumn("Paid Amount", ColumnKind.CURRENCY),
)

MONTHLY_COLUMNS = (
    TableColumn("Month"),
    TableColumn("Revenue", ColumnKind.CURRENCY),
    TableColumn("Payments", ColumnKind.CURRENCY),
)

INVOICE_FIELD_COLUMNS = (TableColumn("Field"), TableColumn("Value"))

# Number of clients plotted in the client report chart.
CHART_CLIENT_LIMIT = 10


def invoice_status_display(status: InvoiceStatus) -> Tuple[str, Emphasis]:
    return INVOICE_STATUS_DISPLAY.get(status, (status.value.title(), Emphasis.NEUTRAL))


def payment_status_display(status: PaymentStatus) -> Tuple[str, Emphasis]:
    return PAYMENT_STATUS_DISPLAY[status]


class DocumentRenderer:
    """
    Pure transform from domain snapshots to document trees.

    The renderer reads only its arguments; the clock is injected so the
    footer timestamp is the single non-deterministic value in a tree.
    """

    def __init__(
        self,
        company_name: str,
        product_name: str,
        default_currency: str = "IDR",
        billing_service: Optional[BillingService] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.company_name = company_name
        self.product_name = product_name
        self.default_currency = default_currency
        self.billing = billing_service or BillingService()
        self.clock = clock

    # Invoices

    def render_invoice(self, invoice: Invoice) -> DocumentTree:
        """
        Render one invoice.

        Sections: header, bill-to, details, description (optional),
        financial summary, notes/terms (optional), footer.

        Raises:
            MissingRequiredFieldError: the invoice has no id or total amount
        """
        if not invoice.id:
            raise MissingRequiredFieldError("Invoice", "id")
        if invoice.total_amount is None:
            raise MissingRequiredFieldError("Invoice", "total_amount")

        generated_at = self.clock()
        currency = invoice.currency or self.default_currency
        number = invoice.invoice_number or "draft"

        sections: List[DocumentSection] = [
            self._invoice_header(invoice, number),
            self._bill_to(invoice),
            self._invoice_details(invoice, currency),
        ]
        if invoice.description:
            sections.append(DocumentSection(
                kind=SectionKind.DESCRIPTION,
                title="Description",
                text=invoice.description
            ))
        sections.append(self._financial_summary(invoice, currency))

        notes = self._notes(invoice)
        if notes:
            sections.append(notes)

        sections.append(self._footer(generated_at, f"{self.product_name} - Invoice #{number}"))

        return DocumentTree(
            document_type="invoice",
            title=f"Invoice {number}",
            reference=number,
            currency=currency,
            generated_at=generated_at,
            sections=tuple(sections),
            tabular=self._invoice_fields_table(invoice, currency),
            entity_id=invoice.id
        )

    def _invoice_header(self, invoice: Invoice, number: str) -> DocumentSection:
        status_label, status_emphasis = invoice_status_display(invoice.status)
        payment_label, payment_emphasis = payment_status_display(
            self.billing.resolve_payment_status(invoice)
        )
        fields = [
            DocumentField("Company", self.company_name, key="company"),
            DocumentField("Invoice Number", f"#{number}", key="invoice_number"),
        ]
        if invoice.title:
            fields.append(DocumentField("Title", invoice.title, key="title"))
        fields.append(DocumentField("Status", status_label, status_emphasis, key="status"))
        fields.append(DocumentField("Payment Status", payment_label, payment_emphasis, key="payment_status"))
        return DocumentSection(SectionKind.HEADER, "INVOICE", tuple(fields))

    def _bill_to(self, invoice: Invoice) -> DocumentSection:
        client = invoice.client
        fields = [DocumentField("Client", client.name or NOT_AVAILABLE, highlight=True, key="client_name")]
        if client.company:
            fields.append(DocumentField("Company", client.company, key="client_company"))
        if client.email:
            fields.append(DocumentField("Email", client.email, key="client_email"))
        return DocumentSection(SectionKind.PARTIES, "Bill To", tuple(fields))

    def _invoice_details(self, invoice: Invoice, currency: str) -> DocumentSection:
        fields = [
            DocumentField("Issue Date", format_date(invoice.issue_date), key="issue_date"),
            DocumentField("Due Date", format_date(invoice.due_date), key="due_date"),
        ]
        if invoice.paid_date:
            fields.append(DocumentField(
                "Paid Date", format_date(invoice.paid_date), Emphasis.POSITIVE, key="paid_date"
            ))
        fields.append(DocumentField("Currency", currency, key="currency"))
        return DocumentSection(SectionKind.DETAILS, "Invoice Details", tuple(fields))

    def _financial_summary(self, invoice: Invoice, currency: str) -> DocumentSection:
        remaining = self.billing.compute_remaining(invoice.total_amount, invoice.paid_amount)
        fields = [DocumentField("Subtotal", format_currency(invoice.amount, currency), key="subtotal")]
        if invoice.tax_amount > 0:
            fields.append(DocumentField(
                f"Tax ({format_percentage(invoice.tax_rate)})",
                format_currency(invoice.tax_amount, currency),
                key="tax"
            ))
        fields.append(DocumentField(
            "Total", format_currency(invoice.total_amount, currency), highlight=True, key="total"
        ))
        if invoice.paid_amount > 0:
            fields.append(DocumentField(
                "Paid", format_currency(invoice.paid_amount, currency), Emphasis.POSITIVE, key="paid"
            ))
        if remaining > 0:
            fields.append(DocumentField(
                "Balance Due", format_currency(remaining, currency),
                Emphasis.NEGATIVE, highlight=True, key="balance_due"
            ))
        return DocumentSection(SectionKind.FINANCIAL_SUMMARY, "Financial Summary", tuple(fields))

    def _notes(self, invoice: Invoice) -> Optional[DocumentSection]:
        fields = []
        if invoice.terms:
            fields.append(DocumentField("Payment Terms", invoice.terms, key="terms"))
        if invoice.notes:
            fields.append(DocumentField("Notes", invoice.notes, key="notes"))
        if not fields:
            return None
        return DocumentSection(SectionKind.NOTES, "Notes & Terms", tuple(fields))

    def _invoice_fields_table(self, invoice: Invoice, currency: str) -> TableData:
        client = invoice.client
        payment_status = self.billing.resolve_payment_status(invoice)
        rows = (
            ("Invoice Number", invoice.invoice_number or ""),
            ("Title", invoice.title or ""),
            ("Client Name", client.name or ""),
            ("Client Email", client.email or ""),
            ("Client Company", client.company or ""),
            ("Issue Date", invoice.issue_date),
            ("Due Date", invoice.due_date),
            ("Paid Date", invoice.paid_date),
            ("Status", invoice.status.value),
            ("Payment Status", payment_status.value),
            ("Subtotal", invoice.amount),
            ("Tax Amount", invoice.tax_amount),
            ("Tax Rate", format_percentage(invoice.tax_rate)),
            ("Total Amount", invoice.total_amount),
            ("Paid Amount", invoice.paid_amount),
            ("Remaining Amount", invoice.remaining_amount),
            ("Currency", currency),
            ("Description", invoice.description or ""),
            ("Notes", invoice.notes or ""),
            ("Terms", invoice.terms or ""),
        )
        return TableData(INVOICE_FIELD_COLUMNS, rows)

    # Reports

    def render_report(self, bundle: ReportBundle) -> DocumentTree:
        """
        Render a report bundle.

        Sections: header, key metrics, chart series, tabular rows, footer.
        Sections without data are left out.
        """
        generated_at = self.clock()
        report_type = bundle.report_type
        currency = bundle.currency or self.default_currency

        builders = {
            ReportType.FINANCIAL_SUMMARY: self._financial_summary_report,
            ReportType.INVOICE_REPORT: self._invoice_report,
            ReportType.PAYMENT_REPORT: self._payment_report,
            ReportType.CLIENT_REPORT: self._client_report,
            ReportType.MONTHLY_ANALYSIS: self._monthly_analysis_report,
        }
        metrics, chart, table, tabular = builders[report_type](bundle, currency)

        sections: List[DocumentSection] = [self._report_header(bundle)]
        if metrics:
            sections.append(DocumentSection(SectionKind.KEY_METRICS, "Key Metrics", tuple(metrics)))
        if chart is not None and chart.points:
            sections.append(DocumentSection(SectionKind.CHART, self._chart_title(report_type), chart=chart))
        if table is not None and table.rows:
            sections.append(DocumentSection(SectionKind.TABLE, "Details", table=table))
        sections.append(self._footer(generated_at, f"{self.product_name} - {report_type.label}"))

        return DocumentTree(
            document_type=report_type.value,
            title=report_type.label,
            reference=report_type.value,
            currency=currency,
            generated_at=generated_at,
            sections=tuple(sections),
            tabular=tabular
        )

    def _report_header(self, bundle: ReportBundle) -> DocumentSection:
        fields = [
            DocumentField("Company", self.company_name, key="company"),
            DocumentField("Report", bundle.report_type.label, key="report"),
        ]
        if bundle.date_range is not None and bundle.report_type in (
            ReportType.INVOICE_REPORT, ReportType.PAYMENT_REPORT
        ):
            period = f"{format_date(bundle.date_range.start)} - {format_date(bundle.date_range.end)}"
            fields.append(DocumentField("Period", period, key="period"))
        return DocumentSection(SectionKind.HEADER, bundle.report_type.label, tuple(fields))

    def _chart_title(self, report_type: ReportType) -> str:
        if report_type == ReportType.CLIENT_REPORT:
            return "Top Clients by Revenue"
        return "Monthly Revenue"

    def _revenue_metrics(self, metrics: FinancialMetrics, currency: str) -> List[DocumentField]:
        rate = self.billing.collection_rate(metrics)
        return [
            DocumentField("Total Revenue", format_currency(metrics.total_revenue, currency), key="total_revenue"),
            DocumentField(
                "Paid Revenue", format_currency(metrics.paid_revenue, currency),
                Emphasis.POSITIVE, key="paid_revenue"
            ),
            DocumentField("Collection Rate", f"{rate}%", key="collection_rate"),
            DocumentField(
                "Outstanding",
                f"{format_currency(metrics.outstanding_revenue, currency)} "
                f"({metrics.unpaid_count} invoices pending)",
                Emphasis.WARNING, key="outstanding"
            ),
            DocumentField(
                "Pending Revenue", format_currency(metrics.pending_revenue, currency),
                Emphasis.WARNING, key="pending_revenue"
            ),
            DocumentField(
                "Overdue Revenue", format_currency(metrics.overdue_revenue, currency),
                Emphasis.NEGATIVE, highlight=metrics.overdue_revenue > 0, key="overdue_revenue"
            ),
            DocumentField("Total Invoices", str(metrics.total_invoices), key="total_invoices"),
            DocumentField("Paid Invoices", str(metrics.paid_count), key="paid_count"),
        ]

    def _monthly_chart(self, monthly: Tuple[MonthlyRevenuePoint, ...]) -> ChartSeries:
        return ChartSeries(
            series_names=("Revenue", "Payments"),
            points=tuple(
                ChartPoint(format_month(point.month_year), (point.revenue, point.payments))
                for point in monthly
            )
        )

    def _financial_summary_report(self, bundle: ReportBundle, currency: str):
        metrics = bundle.metrics or FinancialMetrics()
        return self._revenue_metrics(metrics, currency), self._monthly_chart(bundle.monthly), None, None

    def _invoice_report(self, bundle: ReportBundle, currency: str):
        metrics = self.billing.aggregate_report_metrics(bundle.invoices)
        table = TableData(
            INVOICE_REPORT_COLUMNS,
            tuple(self._invoice_row(invoice) for invoice in bundle.invoices)
        )
        return self._revenue_metrics(metrics, currency), None, table, table

    def _invoice_row(self, invoice: Invoice) -> tuple:
        return (
            invoice.invoice_number,
            invoice.title,
            invoice.client.name,
            invoice.amount,
            invoice.tax_amount,
            invoice.total_amount,
            invoice.paid_amount,
            invoice.remaining_amount,
            invoice.status.value,
            self.billing.resolve_payment_status(invoice).value,
            invoice.issue_date,
            invoice.due_date,
        )

    def _payment_report(self, bundle: ReportBundle, currency: str):
        summary = self.billing.summarize_payments(bundle.payments)
        metrics = [
            DocumentField("Total Payments", format_currency(summary.total_amount, currency), key="total_payments"),
            DocumentField(
                "Completed", format_currency(summary.completed_amount, currency),
                Emphasis.POSITIVE, key="completed_amount"
            ),
            DocumentField("Payment Count", str(summary.payment_count), key="payment_count"),
            DocumentField("Completed Count", str(summary.completed_count), key="completed_count"),
        ]
        table = TableData(
            PAYMENT_REPORT_COLUMNS,
            tuple(self._payment_row(payment) for payment in bundle.payments)
        )
        return metrics, None, table, table

    def _payment_row(self, payment: Payment) -> tuple:
        return (
            payment.payment_number,
            payment.invoice_number,
            payment.client_name,
            payment.amount,
            payment.payment_method.value,
            payment.payment_date,
            payment.reference_number or "",
            payment.status.value,
        )

    def _client_report(self, bundle: ReportBundle, currency: str):
        clients = bundle.clients
        total_revenue = sum((client.total_revenue for client in clients), Decimal("0"))
        paid = sum((client.paid_amount for client in clients), Decimal("0"))
        invoice_count = sum(client.invoice_count for client in clients)
        metrics = [
            DocumentField("Clients", str(len(clients)), key="client_count"),
            DocumentField("Total Revenue", format_currency(total_revenue, currency), key="total_revenue"),
            DocumentField(
                "Paid Amount", format_currency(paid, currency), Emphasis.POSITIVE, key="paid_amount"
            ),
            DocumentField("Invoices", str(invoice_count), key="invoice_count"),
        ]
        chart = ChartSeries(
            series_names=("Revenue",),
            points=tuple(
                ChartPoint(self._short_name(client.client_name), (client.total_revenue,))
                for client in clients[:CHART_CLIENT_LIMIT]
            )
        )
        table = TableData(CLIENT_REPORT_COLUMNS, tuple(self._client_row(client) for client in clients))
        return metrics, chart, table, table

    def _client_row(self, client: ClientSummary) -> tuple:
        return (
            client.client_name,
            client.client_company or "",
            client.total_revenue,
            client.invoice_count,
            client.paid_amount,
        )

    def _short_name(self, name: str) -> str:
        return name if len(name) <= 15 else f"{name[:15]}..."

    def _monthly_analysis_report(self, bundle: ReportBundle, currency: str):
        revenue = sum((point.revenue for point in bundle.monthly), Decimal("0"))
        payments = sum((point.payments for point in bundle.monthly), Decimal("0"))
        metrics = [
            DocumentField("Total Revenue", format_currency(revenue, currency), key="total_revenue"),
            DocumentField(
                "Total Payments", format_currency(payments, currency), Emphasis.POSITIVE, key="total_payments"
            ),
            DocumentField("Months", str(len(bundle.monthly)), key="months"),
        ]
        table = TableData(
            MONTHLY_COLUMNS,
            tuple((format_month(p.month_year), p.revenue, p.payments) for p in bundle.monthly)
        )
        return metrics, self._monthly_chart(bundle.monthly), table, None

    # Shared

    def _footer(self, generated_at: datetime, caption: str) -> DocumentSection:
        return DocumentSection(
            SectionKind.FOOTER,
            "Footer",
            (
                DocumentField(
                    "Generated On",
                    f"Generated on {format_date(generated_at)} - {self.company_name}",
                    key="generated_on"
                ),
                DocumentField("Document", caption, key="caption"),
            )
        )
