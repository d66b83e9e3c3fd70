"""
Printable markup encoder using Jinja2.
Renders a document tree into a self-contained HTML page with inlined styles.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from finance_app.domain.models.document import ColumnKind, DocumentTree
from finance_app.domain.models.report import ExportFormat
from finance_app.domain.services.formatting import (
    format_currency,
    format_date,
    format_month,
    format_percentage,
    format_plain_number,
    format_short_date,
)
from finance_app.infrastructure.export.encoders.base import BaseEncoder


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_template_environment(templates_dir: Optional[Path] = None) -> Environment:
    """Jinja2 environment with the document formatting filters registered."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(['html', 'xml']),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True
    )

    def bar_width(value: Any, maximum: Any) -> str:
        """Bar length as a CSS percentage of the largest chart value."""
        top = Decimal(str(maximum or 0))
        if top <= 0:
            return "0%"
        ratio = Decimal(str(value or 0)) / top * 100
        return f"{ratio.quantize(Decimal('0.1'))}%"

    def cell(value: Any, kind: ColumnKind, currency: str) -> str:
        """Display text for a raw table value."""
        if value is None or value == "":
            return ""
        if kind == ColumnKind.CURRENCY:
            return format_currency(value, currency)
        if kind == ColumnKind.DATE:
            return format_short_date(value)
        if kind == ColumnKind.NUMBER:
            return format_plain_number(value)
        return str(value)

    env.filters['currency'] = format_currency
    env.filters['date'] = format_date
    env.filters['short_date'] = format_short_date
    env.filters['month'] = format_month
    env.filters['percentage'] = format_percentage
    env.filters['bar_width'] = bar_width
    env.filters['cell'] = cell
    return env


class HTMLEncoder(BaseEncoder):
    """Encodes a tree as printable HTML."""

    export_format = ExportFormat.HTML

    def __init__(self, environment: Optional[Environment] = None):
        self.env = environment or create_template_environment()

    def render(self, tree: DocumentTree, for_print: bool = False) -> str:
        """
        Render the tree to markup.

        ``for_print`` adds the print dialog trigger used by the browser
        preview; the PDF encoder renders without it.
        """
        template = self.env.get_template(f"{self._template_for(tree)}.html")
        return template.render(tree=tree, for_print=for_print)

    def encode_bytes(self, tree: DocumentTree) -> bytes:
        return self.render(tree, for_print=True).encode("utf-8")

    def _template_for(self, tree: DocumentTree) -> str:
        return "invoice" if tree.document_type == "invoice" else "report"
