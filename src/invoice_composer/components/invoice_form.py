"""
Invoice form component for the Invoice Composer.

Provides the header, billed-party, line item, logo and notes inputs plus
the submit button with its status badge. Every input writes straight to
ComposerState.
"""

import reflex as rx

from invoice_composer.state import LOGO_UPLOAD_ID, ComposerState
from invoice_composer.workflow import SubmissionStatus

# label and badge colour for each visible submission status; idle shows nothing
STATUS_BADGES = {
    SubmissionStatus.IN_PROGRESS: ("Submitting", "blue"),
    SubmissionStatus.SUCCESS: ("Downloaded", "green"),
    SubmissionStatus.FAILED: ("Failed", "red"),
}


def invoice_form() -> rx.Component:
    """
    Build the editing panel.

    Returns:
        The form card component.
    """
    return rx.box(
        rx.heading("Invoice Details", size="4", as_="h4"),
        rx.box(
            _labeled_input(
                "Invoice Number *", "invoice_number", ComposerState.invoice_number
            ),
            _labeled_input(
                "Invoice Date *",
                "invoice_date",
                ComposerState.invoice_date,
                type_="date",
            ),
            class_name="field-row",
        ),
        _labeled_input(
            "Due Date *", "due_date", ComposerState.due_date, type_="date"
        ),
        rx.heading("Bill To", size="4", as_="h4"),
        _text_input("Name *", "bill_to.name", ComposerState.bill_to_name),
        _text_input(
            "Email *", "bill_to.email", ComposerState.bill_to_email, type_="email"
        ),
        _text_input("Address *", "bill_to.address", ComposerState.bill_to_address),
        rx.heading("Items *", size="4", as_="h4"),
        rx.foreach(ComposerState.items, _item_row),
        rx.button(
            "+ Add Item",
            on_click=ComposerState.add_item,
            color_scheme="green",
            class_name="full-width",
        ),
        _logo_picker(),
        rx.box(
            rx.text("Notes", class_name="label"),
            rx.text_area(
                value=ComposerState.notes,
                on_change=lambda value: ComposerState.set_draft_field("notes", value),
                rows="3",
            ),
            class_name="field",
        ),
        rx.box(
            rx.heading(f"Total: {ComposerState.subtotal_display}", size="3", as_="h5"),
            rx.button(
                rx.cond(ComposerState.is_submitting, "Generating...", "Download PDF"),
                on_click=ComposerState.submit,
                disabled=ComposerState.is_submitting,
                loading=ComposerState.is_submitting,
            ),
            _status_badge(),
            class_name="submit-row",
        ),
        class_name="card form-card",
    )


def _labeled_input(
    label: str, path: str, value: rx.Var, type_: str = "text"
) -> rx.Component:
    """Build a label above an input bound to a draft field."""
    return rx.box(
        rx.text(label, class_name="label"),
        rx.input(
            type=type_,
            value=value,
            on_change=lambda new_value: ComposerState.set_draft_field(path, new_value),
        ),
        class_name="field",
    )


def _text_input(
    placeholder: str, path: str, value: rx.Var, type_: str = "text"
) -> rx.Component:
    """Build a placeholder-labelled input bound to a draft field."""
    return rx.input(
        type=type_,
        placeholder=placeholder,
        value=value,
        on_change=lambda new_value: ComposerState.set_draft_field(path, new_value),
        class_name="field",
    )


def _item_row(item: rx.Var, index: rx.Var) -> rx.Component:
    """Build the inputs for one line item."""
    return rx.box(
        rx.input(
            placeholder="Description *",
            value=item["description"],
            on_change=lambda value: ComposerState.edit_item(
                index, "description", value
            ),
            class_name="item-description",
        ),
        rx.input(
            type="number",
            placeholder="Qty",
            min="1",
            value=item["quantity"],
            on_change=lambda value: ComposerState.edit_item(index, "quantity", value),
            class_name="item-number",
        ),
        rx.input(
            type="number",
            placeholder="Price",
            min="0",
            value=item["price"],
            on_change=lambda value: ComposerState.edit_item(index, "price", value),
            class_name="item-number",
        ),
        rx.text(item["line_total_display"], weight="bold", class_name="item-total"),
        rx.button(
            rx.icon("x", size=14),
            on_click=ComposerState.remove_item(index),
            color_scheme="red",
            size="1",
            title="Remove item",
        ),
        class_name="item-row",
    )


def _logo_picker() -> rx.Component:
    """Build the company logo picker."""
    return rx.box(
        rx.text("Company Logo", class_name="label"),
        rx.upload(
            rx.text("Drop an image here or click to select", class_name="muted"),
            id=LOGO_UPLOAD_ID,
            accept={"image/*": []},
            max_files=1,
            multiple=False,
            on_drop=ComposerState.handle_logo_upload(
                rx.upload_files(upload_id=LOGO_UPLOAD_ID)
            ),
            class_name="logo-upload",
        ),
        rx.cond(
            ComposerState.logo_preview != "",
            rx.button(
                "Remove logo",
                on_click=ComposerState.clear_logo,
                variant="soft",
                size="1",
            ),
        ),
        class_name="field",
    )


def _status_badge() -> rx.Component:
    """Build the badge reflecting the current submission status."""
    return rx.match(
        ComposerState.submission_status,
        *[
            (status.value, rx.badge(label, color_scheme=color))
            for status, (label, color) in STATUS_BADGES.items()
        ],
        rx.fragment(),
    )
