"""
Demo implementation of InvoiceService using in-memory storage.

This service is useful for:
- Local development without the REST backend running
- Testing the composer end to end
- Demonstrating the application without external dependencies

Saved invoices get sequential ids and render as a single-page PDF with
the header fields, line items, totals and notes.
"""

import itertools
from dataclasses import dataclass

from invoice_composer.errors import PersistError, RenderError
from invoice_composer.lib import logs
from invoice_composer.models.invoice import (
    TAX_RATE,
    LineItem,
    Logo,
    RenderedDocument,
    SubmissionResult,
    compute_totals,
)
from invoice_composer.services.invoice_service import InvoiceService
from invoice_composer.utils import format_currency

LOG = logs.logger(__file__)

_PAGE_WIDTH = 595
_PAGE_HEIGHT = 842
_MARGIN = 50
_FONT_SIZE = 11
_LEADING = 16


@dataclass(slots=True)
class StoredInvoice:
    """An invoice held by the demo service."""

    id: str
    payload: dict
    logo: Logo | None = None


class DemoInvoiceService(InvoiceService):
    """
    In-memory invoice service.

    Attributes:
        currency: Currency code used on rendered documents.
    """

    def __init__(self, currency: str = "INR") -> None:
        """
        Initialize an empty store.

        Args:
            currency: Currency code printed next to amounts.
        """
        self.currency = currency
        self._invoices: dict[str, StoredInvoice] = {}
        self._ids = itertools.count(1)

    async def save_invoice(
        self, payload: dict, logo: Logo | None = None
    ) -> SubmissionResult:
        """Store the invoice and return its new id."""
        invoice_number = payload.get("invoiceNumber")
        if not invoice_number:
            raise PersistError()
        invoice_id = str(next(self._ids))
        self._invoices[invoice_id] = StoredInvoice(
            id=invoice_id, payload=dict(payload), logo=logo
        )
        LOG.info("Stored demo invoice - id:%s number:%s", invoice_id, invoice_number)
        return SubmissionResult(id=invoice_id, invoice_number=invoice_number)

    async def render_invoice(self, invoice_id: str) -> RenderedDocument:
        """Render a stored invoice as a PDF document."""
        stored = self._invoices.get(invoice_id)
        if stored is None:
            raise RenderError()
        return RenderedDocument(
            content=render_pdf(self._document_lines(stored)),
            media_type="application/pdf",
        )

    def get(self, invoice_id: str) -> StoredInvoice | None:
        """Return a stored invoice, or None."""
        return self._invoices.get(invoice_id)

    def _document_lines(self, stored: StoredInvoice) -> list[str]:
        """Lay out the invoice as plain text lines."""
        payload = stored.payload
        items = [
            LineItem(
                description=item.get("description", ""),
                quantity=item.get("quantity", 1),
                price=item.get("price", 0.0),
            )
            for item in payload.get("items", [])
        ]
        totals = compute_totals(items)

        lines = [
            "INVOICE",
            "",
            f"Invoice No: {payload.get('invoiceNumber', '')}",
            f"Invoice Date: {payload.get('invoiceDate', '')}",
            f"Due Date: {payload.get('dueDate', '')}",
            f"Customer Name: {payload.get('customerName', '')}",
            f"Email: {payload.get('customerEmail', '')}",
            f"Address: {payload.get('customerAddress', '')}",
        ]
        if stored.logo is not None:
            lines.append(f"Logo: {stored.logo.filename}")
        lines.append("")
        lines.append("Description / Qty / Price / Total")
        for item in items:
            lines.append(
                f"{item.description or '-'} / {item.quantity} / "
                f"{self._money(item.price)} / {self._money(item.line_total)}"
            )
        lines.extend(
            [
                "",
                f"Subtotal: {self._money(totals.subtotal)}",
                f"Tax ({TAX_RATE:.0%}): {self._money(totals.tax)}",
                f"Grand Total: {self._money(totals.grand_total)}",
            ]
        )
        if notes := payload.get("notes"):
            lines.extend(["", f"Notes: {notes}"])
        lines.extend(["", "Thank you for your business!"])
        return lines

    def _money(self, value: float) -> str:
        return format_currency(value, self.currency)


def render_pdf(lines: list[str]) -> bytes:
    """
    Write text lines onto a single A4 page of a minimal PDF.

    Args:
        lines: Lines drawn top to bottom in Helvetica.

    Returns:
        Complete PDF file contents.
    """
    text = " T* ".join(f"({_escape(line)}) Tj" for line in lines)
    stream = (
        f"BT /F1 {_FONT_SIZE} Tf {_LEADING} TL "
        f"{_MARGIN} {_PAGE_HEIGHT - _MARGIN} Td {text} ET"
    ).encode("latin-1", "replace")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {_PAGE_WIDTH} "
            f"{_PAGE_HEIGHT}] /Contents 4 0 R "
            "/Resources << /Font << /F1 5 0 R >> >> >>"
        ).encode("ascii"),
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


def _escape(line: str) -> str:
    """Escape PDF string delimiters."""
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
