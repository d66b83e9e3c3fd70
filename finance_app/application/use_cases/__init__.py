"""
Application use cases.
"""

from .export_report_use_case import ExportReportUseCase
from .invoice_document_use_case import GenerateInvoiceDocumentUseCase, INVOICE_DOCUMENT_FORMATS
from .list_use_cases import ListInvoicesUseCase, ListPaymentsUseCase

__all__ = [
    "ExportReportUseCase",
    "GenerateInvoiceDocumentUseCase",
    "INVOICE_DOCUMENT_FORMATS",
    "ListInvoicesUseCase",
    "ListPaymentsUseCase",
]
