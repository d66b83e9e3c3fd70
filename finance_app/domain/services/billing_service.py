"""Billing service for invoice totals, balances and report-level aggregates.
Handles the financial derivations shared by every export format.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Any
from decimal import Decimal, ROUND_HALF_UP
from datetime import date

from finance_app.domain.models.base import ValidationError, BusinessRuleViolation
from finance_app.domain.models.invoice import Invoice, InvoiceStatus, PaymentStatus, to_money
from finance_app.domain.models.payment import Payment
from finance_app.domain.models.report import FinancialMetrics

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived tax and total for a subtotal."""

    tax_amount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class PaymentSummary:
    """Roll-up of a list of payments."""

    total_amount: Decimal
    completed_amount: Decimal
    payment_count: int
    completed_count: int


class BillingService:
    """
    Domain service for invoice arithmetic.
    All amounts are Decimal rounded half-up to 2 places.
    """

    def compute_invoice_totals(self, subtotal: Any, tax_rate_percent: Any) -> InvoiceTotals:
        """
        Compute tax and total for a subtotal.

        tax = subtotal * rate / 100 and total = subtotal + tax, both
        rounded to 2 decimal places.
        """
        amount = to_money(subtotal)
        rate = Decimal(str(tax_rate_percent or 0))

        if amount < 0:
            raise ValidationError("Subtotal cannot be negative", "amount")
        if rate < 0 or rate > 100:
            raise ValidationError("Tax rate must be between 0 and 100", "tax_rate")

        tax_amount = self._round_currency(amount * rate / Decimal("100"))
        total_amount = self._round_currency(amount + tax_amount)
        return InvoiceTotals(tax_amount=tax_amount, total_amount=total_amount)

    def compute_balance(self, total_amount: Any, paid_amount: Any) -> Decimal:
        """Raw total minus paid. Negative means the invoice was overpaid."""
        return self._round_currency(to_money(total_amount) - to_money(paid_amount))

    def compute_remaining(self, total_amount: Any, paid_amount: Any) -> Decimal:
        """Amount still owed, never below zero."""
        return max(self.compute_balance(total_amount, paid_amount), ZERO)

    def resolve_payment_status(self, invoice: Invoice) -> PaymentStatus:
        """
        Derive the payment status from the invoice amounts.

        A remaining amount of zero or less is fully paid; any payment below
        the total is partial.
        """
        if invoice.total_amount is not None:
            if self.compute_remaining(invoice.total_amount, invoice.paid_amount) <= 0:
                return PaymentStatus.PAID
            if invoice.paid_amount > 0:
                return PaymentStatus.PARTIAL
            return PaymentStatus.UNPAID
        return invoice.payment_status or PaymentStatus.UNPAID

    def aggregate_report_metrics(
        self,
        invoices: Iterable[Invoice],
        as_of: Optional[date] = None
    ) -> FinancialMetrics:
        """
        Sum a list of invoices into report metrics.

        Remaining balances of open invoices are split into overdue (due date
        passed, or flagged overdue) and pending. Cancelled invoices count
        towards the total but carry no outstanding balance.
        """
        today = as_of or date.today()

        total_revenue = ZERO
        paid_revenue = ZERO
        pending_revenue = ZERO
        overdue_revenue = ZERO
        total_invoices = 0
        paid_count = 0

        for invoice in invoices:
            total_invoices += 1
            total = to_money(invoice.total_amount)
            total_revenue += total

            is_paid = (
                invoice.status == InvoiceStatus.PAID
                or self.resolve_payment_status(invoice) == PaymentStatus.PAID
            )
            if invoice.status == InvoiceStatus.PAID:
                paid_count += 1
            if is_paid:
                paid_revenue += invoice.paid_amount
                continue

            if invoice.status == InvoiceStatus.CANCELLED:
                continue

            remaining = self.compute_remaining(total, invoice.paid_amount)
            if invoice.status == InvoiceStatus.OVERDUE or invoice.is_past_due(today):
                overdue_revenue += remaining
            else:
                pending_revenue += remaining

        return FinancialMetrics(
            total_revenue=self._round_currency(total_revenue),
            paid_revenue=self._round_currency(paid_revenue),
            pending_revenue=self._round_currency(pending_revenue),
            overdue_revenue=self._round_currency(overdue_revenue),
            total_invoices=total_invoices,
            paid_count=paid_count
        )

    def collection_rate(self, metrics: FinancialMetrics) -> int:
        """Whole percentage of revenue collected; 0 when there is no revenue."""
        if metrics.total_revenue <= 0:
            return 0
        rate = metrics.paid_revenue / metrics.total_revenue * 100
        return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def summarize_payments(self, payments: Iterable[Payment]) -> PaymentSummary:
        """Total the payments of a report, separating completed ones."""
        total = ZERO
        completed = ZERO
        count = 0
        completed_count = 0
        for payment in payments:
            count += 1
            total += payment.amount
            if payment.is_completed:
                completed_count += 1
                completed += payment.amount
        return PaymentSummary(
            total_amount=self._round_currency(total),
            completed_amount=self._round_currency(completed),
            payment_count=count,
            completed_count=completed_count
        )

    def validate_payment(
        self,
        invoice: Invoice,
        amount: Any,
        payment_date: date,
        today: Optional[date] = None
    ) -> None:
        """
        Check a new payment against the recording rules.

        Raises:
            ValidationError: amount not positive or date in the future
            BusinessRuleViolation: payment would exceed the remaining balance
        """
        value = to_money(amount)
        if value <= 0:
            raise ValidationError("Payment amount must be greater than 0", "amount")

        if payment_date > (today or date.today()):
            raise ValidationError("Payment date cannot be in the future", "payment_date")

        remaining = self.compute_remaining(invoice.total_amount, invoice.paid_amount)
        if value > remaining:
            raise BusinessRuleViolation(
                f"Payment amount cannot exceed remaining invoice amount of {remaining}"
            )

    def check_completed_payments(self, invoice: Invoice, payments: Iterable[Payment]) -> Decimal:
        """
        Sum the completed payments of an invoice.

        Raises BusinessRuleViolation if they add up to more than the invoice total.
        """
        completed = sum(
            (payment.amount for payment in payments if payment.is_completed),
            ZERO
        )
        if completed > to_money(invoice.total_amount):
            raise BusinessRuleViolation(
                f"Completed payments for invoice {invoice.invoice_number} exceed its total"
            )
        return self._round_currency(completed)

    def _round_currency(self, amount: Decimal) -> Decimal:
        """
        Round amount to 2 decimal places for currency.
        """
        return Decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
