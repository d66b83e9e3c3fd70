"""
Domain services for the financial document pipeline.
This module exports the services holding the pipeline's pure logic.
"""

from .billing_service import BillingService, InvoiceTotals, PaymentSummary
from .document_renderer import DocumentRenderer

__all__ = [
    "BillingService",
    "InvoiceTotals",
    "PaymentSummary",
    "DocumentRenderer",
]
