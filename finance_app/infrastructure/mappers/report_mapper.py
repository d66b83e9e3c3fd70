"""
Report mapper for the aggregate view and stored procedure results.
"""

from typing import Any, Dict, Optional

from finance_app.domain.models.client import ClientSummary
from finance_app.domain.models.invoice import to_money
from finance_app.domain.models.report import FinancialMetrics, MonthlyRevenuePoint


class ReportMapper:
    """Maps financial_metrics, get_monthly_revenue and get_top_clients rows."""

    def metrics_to_domain(self, row: Optional[Dict[str, Any]]) -> FinancialMetrics:
        """Missing rows or columns count as zero."""
        row = row or {}
        return FinancialMetrics(
            total_revenue=to_money(row.get("total_revenue")),
            paid_revenue=to_money(row.get("paid_revenue")),
            pending_revenue=to_money(row.get("pending_revenue")),
            overdue_revenue=to_money(row.get("overdue_revenue")),
            total_invoices=int(row.get("total_invoices") or 0),
            paid_count=int(row.get("paid_count") or 0)
        )

    def monthly_to_domain(self, row: Dict[str, Any]) -> MonthlyRevenuePoint:
        return MonthlyRevenuePoint(
            month_year=row["month_year"],
            revenue=to_money(row.get("revenue")),
            payments=to_money(row.get("payments"))
        )

    def client_to_domain(self, row: Dict[str, Any]) -> ClientSummary:
        return ClientSummary(
            client_name=row.get("client_name") or "N/A",
            client_company=row.get("client_company"),
            total_revenue=to_money(row.get("total_revenue")),
            invoice_count=int(row.get("invoice_count") or 0),
            paid_amount=to_money(row.get("paid_amount"))
        )
