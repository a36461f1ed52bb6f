"""
Helper functions for invoice editing and formatting.

Provides helpers for:
- Date parsing (ISO and m/d/y formats) and display formatting
- Currency formatting
- Lenient numeric parsing of form input for quantities and prices
"""

import math
import re
from datetime import date, datetime

_MIN_QUANTITY = 1
_MIN_PRICE = 0.0

# Leading numeric prefix, so "12abc" reads as 12 the way form inputs do
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_date(value: date | str | None) -> date | None:
    """
    Parse a date from form input.

    Args:
        value: A date, an ISO string ("2024-12-25") or m/d/y ("12/25/2024").

    Returns:
        The calendar day, or None if the value is empty or unparsable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value:
        value = value.strip()
    if not value:
        return None

    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    return None


def format_date(value: date | None) -> str:
    """Format a date as dd/mm/yyyy, or the N/A label when absent."""
    if not value:
        return "N/A"
    return value.strftime("%d/%m/%Y")


def format_currency(value: float, currency: str) -> str:
    """
    Format a currency amount with the currency code prefix.

    Args:
        value: Numeric amount to format.
        currency: Currency code (e.g., 'INR', 'USD').

    Returns:
        Formatted string like 'INR 1,234.56'.
    """
    return f"{currency} {value:,.2f}"


def parse_quantity(raw: str | int | float | None) -> int:
    """
    Parse a quantity typed into the form.

    Unparsable or oversized input and anything below one becomes one.
    """
    parsed: int | None = None
    if isinstance(raw, bool):
        parsed = None
    elif isinstance(raw, int):
        parsed = raw
    elif isinstance(raw, float):
        parsed = int(raw) if math.isfinite(raw) else None
    elif isinstance(raw, str):
        match = _INT_PREFIX.match(raw)
        try:
            parsed = int(match.group(1)) if match else None
        except ValueError:
            # more digits than int() will convert
            parsed = None

    if parsed is None or parsed < _MIN_QUANTITY or not _fits_float(parsed):
        return _MIN_QUANTITY
    return parsed


def _fits_float(value: int) -> bool:
    """Return True if the quantity can be multiplied by a float price."""
    try:
        float(value)
    except OverflowError:
        return False
    return True


def parse_price(raw: str | int | float | None) -> float:
    """
    Parse a unit price typed into the form.

    Unparsable input, non-finite values and negatives become zero.
    """
    parsed: float | None = None
    if isinstance(raw, bool):
        parsed = None
    elif isinstance(raw, float):
        parsed = raw
    elif isinstance(raw, int):
        parsed = float(raw) if _fits_float(raw) else None
    elif isinstance(raw, str):
        match = _FLOAT_PREFIX.match(raw)
        parsed = float(match.group(1)) if match else None

    if parsed is None or not math.isfinite(parsed) or parsed <= _MIN_PRICE:
        return _MIN_PRICE
    return parsed
