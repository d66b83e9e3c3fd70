"""
Portable-document encoder using WeasyPrint.
Lays out the printable markup on A4 pages.
"""

import logging
from typing import Optional

from weasyprint import HTML
from weasyprint.text.fonts import FontConfiguration

from finance_app.domain.models.document import DocumentTree
from finance_app.domain.models.report import ExportFormat
from finance_app.infrastructure.export.encoders.base import BaseEncoder
from finance_app.infrastructure.export.encoders.html_encoder import HTMLEncoder, TEMPLATES_DIR

logger = logging.getLogger(__name__)


class PDFEncoder(BaseEncoder):
    """
    Encodes a tree as PDF.

    The markup is the same as the printable encoding, so both carry the
    same sections and field values in the same order.
    """

    export_format = ExportFormat.PDF

    def __init__(self, html_encoder: Optional[HTMLEncoder] = None):
        self.html_encoder = html_encoder or HTMLEncoder()
        self.font_config = FontConfiguration()

    def render_document(self, tree: DocumentTree):
        """Lay out the pages without writing them; useful for page counts."""
        markup = self.html_encoder.render(tree, for_print=False)
        return HTML(string=markup, base_url=str(TEMPLATES_DIR)).render(font_config=self.font_config)

    def encode_bytes(self, tree: DocumentTree) -> bytes:
        document = self.render_document(tree)
        logger.debug(f"Laid out {tree.document_type} {tree.reference} on {len(document.pages)} page(s)")
        return document.write_pdf()
