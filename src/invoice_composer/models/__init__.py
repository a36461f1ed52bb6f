"""
Data models and serialization helpers for the Invoice Composer.

This package provides:
- Draft models (InvoiceDraft, BillTo, LineItem, Logo)
- Derived totals and the fixed tax rate
- Backend exchange values (SubmissionResult, RenderedDocument)
- Serialization to and from the persist endpoint's JSON shape

All models use frozen Python dataclasses.
"""

from invoice_composer.models.invoice import (
    TAX_RATE,
    BillTo,
    DerivedTotals,
    InvoiceDraft,
    LineItem,
    Logo,
    RenderedDocument,
    SubmissionResult,
    compute_totals,
    deserialize_submission_result,
    serialize_invoice,
)

__all__ = [
    "TAX_RATE",
    "BillTo",
    "DerivedTotals",
    "InvoiceDraft",
    "LineItem",
    "Logo",
    "RenderedDocument",
    "SubmissionResult",
    "compute_totals",
    "deserialize_submission_result",
    "serialize_invoice",
]
