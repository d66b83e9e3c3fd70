"""
Base encoder and the encoded document it produces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional

from finance_app.domain.models.document import DocumentTree
from finance_app.domain.models.report import ExportFormat


@dataclass(frozen=True)
class EncodedDocument:
    """Bytes of one exported document plus what delivery needs to ship them."""

    content: bytes
    export_format: ExportFormat
    reference: str
    entity_id: Optional[str] = None

    @property
    def content_type(self) -> str:
        return self.export_format.content_type

    @property
    def extension(self) -> str:
        return self.export_format.extension

    @property
    def size(self) -> int:
        return len(self.content)

    def filename(self, on_date: Optional[date] = None) -> str:
        """``<reference>_<ISO date>.<ext>``, e.g. ``invoice_report_2026-10-19.csv``."""
        day = on_date or date.today()
        return f"{self.reference}_{day.isoformat()}.{self.extension}"


class BaseEncoder(ABC):
    """
    Serializes a DocumentTree into one byte encoding.
    """

    export_format: ExportFormat

    def encode(self, tree: DocumentTree) -> EncodedDocument:
        return EncodedDocument(
            content=self.encode_bytes(tree),
            export_format=self.export_format,
            reference=tree.reference,
            entity_id=tree.entity_id
        )

    @abstractmethod
    def encode_bytes(self, tree: DocumentTree) -> bytes:
        """Produce the encoded bytes for a tree."""
        pass
