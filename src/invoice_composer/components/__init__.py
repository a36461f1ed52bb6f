"""
Reflex UI components for the Invoice Composer.

This package provides:
- invoice_form: Header, billed party, line item, logo and notes inputs
- invoice_preview: Live preview with computed totals
"""

from invoice_composer.components.invoice_form import invoice_form
from invoice_composer.components.invoice_preview import invoice_preview

__all__ = ["invoice_form", "invoice_preview"]
