"""Utility functions shared across the invoice composer package."""

from invoice_composer.utils.invoice_helpers import (
    format_currency,
    format_date,
    parse_date,
    parse_price,
    parse_quantity,
)

__all__ = [
    "format_currency",
    "format_date",
    "parse_date",
    "parse_price",
    "parse_quantity",
]
