"""
Live invoice preview component.

Shows the draft the way the rendered document will read: header fields,
billed party (with placeholders until filled in), line items, totals and
notes.
"""

import reflex as rx

from invoice_composer.models.invoice import TAX_RATE
from invoice_composer.state import ComposerState


def invoice_preview() -> rx.Component:
    """
    Build the preview panel.

    Returns:
        The preview card component.
    """
    return rx.box(
        _build_header(),
        _build_parties(),
        _build_items_table(),
        _build_totals(),
        rx.cond(
            ComposerState.notes != "",
            rx.box(
                rx.text("Notes:", weight="bold"),
                rx.text(ComposerState.notes),
                class_name="notes",
            ),
        ),
        class_name="card preview-card",
    )


def _build_header() -> rx.Component:
    """Build the INVOICE title with the optional logo."""
    return rx.box(
        rx.heading("INVOICE", size="6", as_="h3", class_name="preview-title"),
        rx.cond(
            ComposerState.logo_preview != "",
            rx.image(
                src=rx.get_upload_url(ComposerState.logo_preview),
                alt="Logo Preview",
                class_name="logo-preview",
            ),
        ),
        class_name="preview-header",
    )


def _build_parties() -> rx.Component:
    """Build invoice metadata and the billed party block."""
    return rx.box(
        rx.box(
            _meta_line(
                "Invoice #:",
                rx.cond(
                    ComposerState.invoice_number != "",
                    ComposerState.invoice_number,
                    "N/A",
                ),
            ),
            _meta_line("Date:", ComposerState.invoice_date_display),
            _meta_line("Due:", ComposerState.due_date_display),
        ),
        rx.box(
            rx.heading("Bill To", size="3", as_="h5"),
            _placeholder(ComposerState.bill_to_name, "Client Name"),
            _placeholder(ComposerState.bill_to_email, "client@email.com"),
            _placeholder(ComposerState.bill_to_address, "Client Address"),
            class_name="bill-to",
        ),
        class_name="preview-parties",
    )


def _build_items_table() -> rx.Component:
    """Build the line item table."""
    return rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell("Description"),
                rx.table.column_header_cell("Qty"),
                rx.table.column_header_cell("Price"),
                rx.table.column_header_cell("Total"),
            )
        ),
        rx.table.body(
            rx.foreach(
                ComposerState.items,
                lambda item: rx.table.row(
                    rx.table.cell(item["description_display"]),
                    rx.table.cell(item["quantity"]),
                    rx.table.cell(item["price_display"]),
                    rx.table.cell(item["line_total_display"]),
                ),
            )
        ),
        variant="surface",
        class_name="items-table",
    )


def _build_totals() -> rx.Component:
    """Build the subtotal, tax and grand total lines."""
    return rx.box(
        rx.text(f"Subtotal: {ComposerState.subtotal_display}"),
        rx.text(f"Tax ({TAX_RATE:.0%}): {ComposerState.tax_display}"),
        rx.heading(
            f"Grand Total: {ComposerState.grand_total_display}", size="3", as_="h5"
        ),
        class_name="totals",
    )


def _meta_line(label: str, value: rx.Var | str) -> rx.Component:
    return rx.text(rx.text.strong(label), " ", value)


def _placeholder(value: rx.Var, fallback: str) -> rx.Component:
    """Show ``value``, or ``fallback`` while it is empty."""
    return rx.text(rx.cond(value != "", value, fallback))
