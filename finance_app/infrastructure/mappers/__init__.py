"""
Infrastructure mappers module.
Contains mappers for converting database rows into domain records.
"""

from .invoice_mapper import InvoiceMapper
from .payment_mapper import PaymentMapper
from .report_mapper import ReportMapper

__all__ = [
    "InvoiceMapper",
    "PaymentMapper",
    "ReportMapper"
]
