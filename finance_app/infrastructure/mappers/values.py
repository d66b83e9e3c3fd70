"""Parsing helpers shared by the row mappers."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import TypeAdapter

from finance_app.domain.services.formatting import parse_date

# PostgREST trims trailing zeros from fractional seconds, e.g. ``.12345+00:00``
TIMESTAMP_ADAPTER = TypeAdapter(datetime)


def parse_optional_date(value: Any) -> Optional[date]:
    """Parse a stored date; empty values stay None and bad strings raise ValueError."""
    if value is None or value == "":
        return None
    if isinstance(value, str) and len(value.strip()) > 10:
        return parse_optional_datetime(value).date()
    return parse_date(value)


def parse_optional_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return TIMESTAMP_ADAPTER.validate_python(str(value).strip())
