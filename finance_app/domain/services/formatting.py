"""
Locale formatting for amounts and dates shown on financial documents.

Output follows the Indonesian (id-ID) conventions used across the product:
``.`` groups thousands, currency symbols are followed by a no-break space,
amounts are shown without fractional digits and long dates spell out the
month name in Indonesian.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

NBSP = " "
NOT_AVAILABLE = "N/A"
DEFAULT_CURRENCY = "IDR"

CURRENCY_SYMBOLS = {
    "IDR": "Rp",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "JP¥",
    "AUD": "AU$",
    "SGD": "SGD",
    "MYR": "MYR",
}

MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)

DateLike = Union[date, datetime, str]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot format {value!r} as an amount")
    if isinstance(value, float):
        return Decimal(repr(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Cannot format {value!r} as an amount") from e


def _group_thousands(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return ".".join(groups)


def format_currency(amount: Any = None, currency_code: Optional[str] = None) -> str:
    """
    Render an amount as currency text with no fractional digits.

    ``None`` is treated as 0. Halves round away from zero.

    >>> format_currency(1500000, "IDR")
    'Rp\\xa01.500.000'
    """
    value = _to_decimal(0 if amount is None else amount)
    if not value.is_finite():
        raise ValueError(f"Cannot format {amount!r} as an amount")

    code = (currency_code or DEFAULT_CURRENCY).upper()
    symbol = CURRENCY_SYMBOLS.get(code, code)

    rounded = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    digits = _group_thousands(str(abs(int(rounded))))
    return f"{sign}{symbol}{NBSP}{digits}"


def format_plain_number(value: Any) -> str:
    """Render a raw amount for tabular output: integers bare, others with 2 places."""
    if value is None or value == "":
        return ""
    number = _to_decimal(value)
    if number == number.to_integral_value():
        return str(int(number))
    return str(number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_percentage(value: Any) -> str:
    """Render a tax rate or ratio like ``11%`` or ``12.50%``."""
    return f"{format_plain_number(value if value is not None else 0)}%"


def parse_date(value: DateLike) -> date:
    """
    Parse a date, datetime or ISO-8601 string into a calendar date.

    Raises ValueError if the string is not a recognisable date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    raise ValueError(f"Cannot interpret {value!r} as a date")


def format_date(value: Optional[DateLike]) -> str:
    """Long form date, e.g. ``19 Oktober 2026``. Absent dates render as ``N/A``."""
    if value is None or value == "":
        return NOT_AVAILABLE
    day = parse_date(value)
    return f"{day.day} {MONTH_NAMES[day.month - 1]} {day.year}"


def format_short_date(value: Optional[DateLike]) -> str:
    """Short form date, e.g. ``19/10/2026``. Absent dates render as ``N/A``."""
    if value is None or value == "":
        return NOT_AVAILABLE
    day = parse_date(value)
    return f"{day.day:02d}/{day.month:02d}/{day.year}"


def format_month(month_year: str) -> str:
    """Render a ``YYYY-MM`` key as ``Okt 2026``."""
    day = date.fromisoformat(f"{month_year}-01")
    return f"{MONTH_NAMES[day.month - 1][:3]} {day.year}"
