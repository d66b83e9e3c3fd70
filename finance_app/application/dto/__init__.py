"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ListResponseDTO, HealthCheckResponseDTO
from .export_dto import DateRangeDTO, ExportRequestDTO, DocumentUploadResponseDTO
from .invoice_dto import InvoiceResponseDTO, InvoiceListResponseDTO
from .payment_dto import PaymentResponseDTO, PaymentListResponseDTO

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "ListResponseDTO",
    "HealthCheckResponseDTO",

    # Export DTOs
    "DateRangeDTO",
    "ExportRequestDTO",
    "DocumentUploadResponseDTO",

    # Listing DTOs
    "InvoiceResponseDTO",
    "InvoiceListResponseDTO",
    "PaymentResponseDTO",
    "PaymentListResponseDTO",
]
