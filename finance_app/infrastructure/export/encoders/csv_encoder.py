"""
Tabular (comma-separated) encoder.
"""

import csv
import io
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from finance_app.domain.models.base import UnsupportedExportError
from finance_app.domain.models.document import DocumentTree
from finance_app.domain.models.report import ExportFormat
from finance_app.domain.services.formatting import format_plain_number
from finance_app.infrastructure.export.encoders.base import BaseEncoder


def csv_cell(value: Any) -> str:
    """Raw cell text: amounts unformatted, dates in ISO form, None as empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Decimal, int, float)):
        return format_plain_number(value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class CSVEncoder(BaseEncoder):
    """
    Writes the tree's tabular projection: header row, then one row per record.

    Fields holding the separator, a quote or a line break are wrapped in
    quotes and embedded quotes are doubled.
    """

    export_format = ExportFormat.CSV

    def encode_bytes(self, tree: DocumentTree) -> bytes:
        if tree.tabular is None:
            raise UnsupportedExportError(tree.document_type, self.export_format.value)

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(tree.tabular.header)
        for row in tree.tabular.rows:
            writer.writerow([csv_cell(value) for value in row])
        return buffer.getvalue().encode("utf-8")


class ExcelEncoder(CSVEncoder):
    """Same bytes as CSV, declared with the spreadsheet content type."""

    export_format = ExportFormat.EXCEL
