"""
Export encoders.
This module selects the encoder for a requested export format.
"""

from finance_app.domain.models.base import UnsupportedExportError
from finance_app.domain.models.report import ExportFormat

from .base import BaseEncoder, EncodedDocument
from .csv_encoder import CSVEncoder, ExcelEncoder, csv_cell
from .html_encoder import HTMLEncoder, create_template_environment


def get_encoder(export_format: ExportFormat, document_type: str = "document") -> BaseEncoder:
    """
    Return the encoder for a format.

    The PDF encoder is imported on demand since WeasyPrint needs native
    libraries the other encoders do not.
    """
    if export_format == ExportFormat.CSV:
        return CSVEncoder()
    if export_format == ExportFormat.EXCEL:
        return ExcelEncoder()
    if export_format == ExportFormat.HTML:
        return HTMLEncoder()
    if export_format == ExportFormat.PDF:
        from .pdf_encoder import PDFEncoder
        return PDFEncoder()
    raise UnsupportedExportError(document_type, str(export_format))


__all__ = [
    "BaseEncoder",
    "EncodedDocument",
    "CSVEncoder",
    "ExcelEncoder",
    "HTMLEncoder",
    "csv_cell",
    "create_template_environment",
    "get_encoder",
]
