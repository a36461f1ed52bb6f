"""
Invoice draft models and serialization helpers.

This module defines the invoice-in-progress that the composer edits and
the values exchanged with the backend. The hierarchy is:

    InvoiceDraft
    ├── BillTo (customer name, address, email)
    ├── LineItem[] (description, quantity, unit price)
    └── Logo (optional image bytes plus a display-only preview handle)

All draft types are frozen; edits produce new instances via
dataclasses.replace so a captured draft never changes underneath a
running submission.

Serialization functions reshape a draft into the flat JSON object the
persist endpoint expects and parse its response.
"""

import mimetypes
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Sequence

TAX_RATE = 0.10

_DEFAULT_EXTENSION = "pdf"
_OPAQUE_MEDIA_TYPES = {"", "application/octet-stream"}


@dataclass(frozen=True, slots=True)
class LineItem:
    """Represents one billable row on the invoice."""

    description: str = ""
    quantity: int = 1
    price: float = 0.0

    @property
    def line_total(self) -> float:
        """Return quantity multiplied by unit price."""
        return self.quantity * self.price

    @property
    def is_complete(self) -> bool:
        """Return True when the row has a description and a positive price."""
        return bool(self.description) and self.price > 0


@dataclass(frozen=True, slots=True)
class BillTo:
    """The billed party."""

    name: str = ""
    address: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class Logo:
    """
    An uploaded logo image.

    Attributes:
        content: Raw image bytes, sent as the ``logo`` part.
        filename: Original file name.
        content_type: Image media type.
        preview: Display-only handle (served upload name); never transmitted.
    """

    content: bytes
    filename: str = "logo"
    content_type: str = "application/octet-stream"
    preview: str = ""


@dataclass(frozen=True, slots=True)
class InvoiceDraft:
    """Primary dataclass for the invoice being composed."""

    invoice_number: str = ""
    invoice_date: date | None = None
    due_date: date | None = None
    bill_to: BillTo = field(default_factory=BillTo)
    items: tuple[LineItem, ...] = (LineItem(),)
    notes: str = ""
    logo: Logo | None = None

    @classmethod
    def new(cls, today: date | None = None) -> "InvoiceDraft":
        """Return the session default: dated today with one blank item."""
        return cls(invoice_date=today or date.today(), items=(LineItem(),))

    def totals(self) -> "DerivedTotals":
        """Return totals computed from the current items."""
        return compute_totals(self.items)


@dataclass(frozen=True, slots=True)
class DerivedTotals:
    """Amounts derived from line items, never stored on the draft."""

    subtotal: float
    tax: float
    grand_total: float


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """Identifier returned by the persist endpoint."""

    id: str
    invoice_number: str


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    """Binary document returned by the render endpoint."""

    content: bytes
    media_type: str = "application/pdf"

    @property
    def extension(self) -> str:
        """Return the file extension for the media type, without the dot."""
        media_type = self.media_type.split(";", 1)[0].strip().lower()
        if media_type in _OPAQUE_MEDIA_TYPES:
            return _DEFAULT_EXTENSION
        guessed = mimetypes.guess_extension(media_type)
        return guessed.lstrip(".") if guessed else _DEFAULT_EXTENSION

    def filename(self, invoice_number: str) -> str:
        """Return the download name, e.g. ``invoice-INV-1.pdf``."""
        return f"invoice-{invoice_number}.{self.extension}"


def compute_totals(items: Sequence[LineItem]) -> DerivedTotals:
    """
    Compute subtotal, tax and grand total for a sequence of line items.

    Args:
        items: Line items in display order.

    Returns:
        DerivedTotals with tax at TAX_RATE.
    """
    subtotal = sum(item.line_total for item in items)
    tax = subtotal * TAX_RATE
    return DerivedTotals(subtotal=subtotal, tax=tax, grand_total=subtotal + tax)


def serialize_invoice(draft: InvoiceDraft) -> dict:
    """
    Convert a draft into the JSON object sent as the ``invoice`` part.

    The billed party is flattened into customer fields and the logo is
    left out; its bytes travel as a separate part.
    """
    return {
        "invoiceNumber": draft.invoice_number,
        "invoiceDate": _iso(draft.invoice_date),
        "dueDate": _iso(draft.due_date),
        "customerName": draft.bill_to.name,
        "customerEmail": draft.bill_to.email,
        "customerAddress": draft.bill_to.address,
        "notes": draft.notes,
        "items": [
            {
                "description": item.description,
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in draft.items
        ],
    }


def deserialize_submission_result(
    payload: Mapping[str, Any], fallback_number: str = ""
) -> SubmissionResult:
    """
    Convert a persist response body into a SubmissionResult.

    Args:
        payload: Decoded JSON response.
        fallback_number: Invoice number to use if the response omits it.

    Raises:
        KeyError: If the response has no ``id``.
    """
    raw_id = payload["id"]
    if raw_id is None or raw_id == "":
        raise KeyError("id")
    invoice_number = payload.get("invoiceNumber") or fallback_number
    return SubmissionResult(id=str(raw_id), invoice_number=str(invoice_number))


def _iso(value: date | None) -> str:
    return value.isoformat() if value else ""
