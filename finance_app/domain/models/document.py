"""
Format-neutral document tree.
Produced by the DocumentRenderer and consumed by every export encoder.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Tuple
from enum import Enum


class Emphasis(str, Enum):
    """Visual weight of a value, shared by all output formats."""
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    WARNING = "warning"
    NEGATIVE = "negative"


class SectionKind(str, Enum):
    """Section types, in the order they may appear."""
    HEADER = "header"
    PARTIES = "parties"
    DETAILS = "details"
    DESCRIPTION = "description"
    FINANCIAL_SUMMARY = "financial_summary"
    NOTES = "notes"
    KEY_METRICS = "key_metrics"
    CHART = "chart"
    TABLE = "table"
    FOOTER = "footer"


class ColumnKind(str, Enum):
    """How a table column's raw values are displayed."""
    TEXT = "text"
    CURRENCY = "currency"
    DATE = "date"
    NUMBER = "number"


@dataclass(frozen=True)
class DocumentField:
    """A labelled value. ``highlight`` marks rows such as the total or balance due."""

    label: str
    value: str
    emphasis: Emphasis = Emphasis.NEUTRAL
    highlight: bool = False
    key: Optional[str] = None


@dataclass(frozen=True)
class TableColumn:
    name: str
    kind: ColumnKind = ColumnKind.TEXT


@dataclass(frozen=True)
class TableData:
    """Header plus raw row values, one row per underlying record."""

    columns: Tuple[TableColumn, ...]
    rows: Tuple[Tuple[Any, ...], ...] = ()

    @property
    def header(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)


@dataclass(frozen=True)
class ChartPoint:
    label: str
    values: Tuple[Decimal, ...]


@dataclass(frozen=True)
class ChartSeries:
    """Labelled points with one value per named series."""

    series_names: Tuple[str, ...]
    points: Tuple[ChartPoint, ...]

    @property
    def max_value(self) -> Decimal:
        values = [value for point in self.points for value in point.values]
        return max(values) if values else Decimal("0")


@dataclass(frozen=True)
class DocumentSection:
    kind: SectionKind
    title: str
    fields: Tuple[DocumentField, ...] = ()
    table: Optional[TableData] = None
    chart: Optional[ChartSeries] = None
    text: Optional[str] = None

    def field(self, key: str) -> Optional[DocumentField]:
        for item in self.fields:
            if item.key == key:
                return item
        return None


@dataclass(frozen=True)
class DocumentTree:
    """
    Rendered invoice or report.

    ``reference`` names the document in file names (invoice number or
    report type). ``tabular`` is the flat projection used by tabular
    encodings; it is None for documents with no column layout.
    """

    document_type: str
    title: str
    reference: str
    currency: str
    generated_at: datetime
    sections: Tuple[DocumentSection, ...]
    tabular: Optional[TableData] = None
    entity_id: Optional[str] = None

    @property
    def section_kinds(self) -> Tuple[SectionKind, ...]:
        return tuple(section.kind for section in self.sections)

    def section(self, kind: SectionKind) -> Optional[DocumentSection]:
        for section in self.sections:
            if section.kind == kind:
                return section
        return None
