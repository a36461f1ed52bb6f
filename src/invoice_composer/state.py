"""
Reflex state management for the Invoice Composer.

This module contains the application state that bridges UI events to the
DraftModel and runs submissions in a background event. The draft itself
lives in a backend-only var; every edit copies the values the form and
the preview need into frontend vars, recomputing totals each time.
"""

import os
from pathlib import Path

import reflex as rx

from invoice_composer.draft import DraftModel
from invoice_composer.errors import ValidationError
from invoice_composer.lib import logs, paths
from invoice_composer.models.invoice import InvoiceDraft, LineItem, Logo
from invoice_composer.services import CURRENCY, get_invoice_service
from invoice_composer.utils import format_currency, format_date
from invoice_composer.workflow import SubmissionStatus, run_submission

LOG = logs.logger(__file__)

APP_TITLE = os.getenv("INVOICE_COMPOSER_TITLE", "Invoice Generator")

LOGO_UPLOAD_ID = "logo_upload"


def _format_number(value: float) -> str:
    """Render a number for an input box without a trailing .0."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _item_row(item: LineItem) -> dict[str, str]:
    """Flatten a line item into the strings shown by the form and preview."""
    return {
        "description": item.description,
        "description_display": item.description or "-",
        "quantity": str(item.quantity),
        "price": _format_number(item.price),
        "price_display": format_currency(item.price, CURRENCY),
        "line_total_display": format_currency(item.line_total, CURRENCY),
    }


class ComposerState(rx.State):
    """
    Main application state for the Invoice Composer.

    Handles draft edits, logo upload and the save-then-render submission.
    """

    # Form values mirrored from the draft
    invoice_number: str = ""
    invoice_date: str = ""
    due_date: str = ""
    bill_to_name: str = ""
    bill_to_email: str = ""
    bill_to_address: str = ""
    notes: str = ""
    items: list[dict[str, str]] = []
    logo_preview: str = ""

    # Preview values
    invoice_date_display: str = "N/A"
    due_date_display: str = "N/A"
    subtotal_display: str = ""
    tax_display: str = ""
    grand_total_display: str = ""

    # Submission status
    is_submitting: bool = False
    submission_status: str = SubmissionStatus.IDLE.value

    _model: DraftModel | None = None

    @rx.event
    def on_load(self):
        """Start the session with a fresh default draft."""
        self._model = DraftModel(InvoiceDraft.new())
        self._sync()

    @rx.event
    def set_draft_field(self, path: str, value: str):
        """
        Event handler for header, billed-party and notes inputs.

        Args:
            path: Draft field path, e.g. ``bill_to.email``.
            value: Raw input value.
        """
        self._draft_model().set_field(path, value)
        self._sync()

    @rx.event
    def edit_item(self, index: int, field: str, value: str):
        """Event handler for line item inputs."""
        self._draft_model().edit_item(index, field, value)
        self._sync()

    @rx.event
    def add_item(self):
        """Append a line item, or explain why the last one must be finished."""
        try:
            self._draft_model().add_item()
        except ValidationError as exc:
            return rx.window_alert(exc.message)
        self._sync()

    @rx.event
    def remove_item(self, index: int):
        """Remove the line item at ``index``."""
        self._draft_model().remove_item(index)
        self._sync()

    @rx.event
    async def handle_logo_upload(self, files: list[rx.UploadFile]):
        """
        Event handler for the logo picker.

        Keeps the image bytes on the draft and writes a copy to the upload
        directory so the preview can show it.
        """
        if not files:
            self._replace_logo(None)
            return

        upload = files[0]
        content = await upload.read()
        filename = Path(upload.name or "logo").name
        preview = paths.store_upload(rx.get_upload_dir(), filename, content)
        LOG.info("Logo uploaded - filename:%s bytes:%s", filename, len(content))

        self._replace_logo(
            Logo(
                content=content,
                filename=filename,
                content_type=upload.content_type or "application/octet-stream",
                preview=preview,
            )
        )

    @rx.event
    def clear_logo(self):
        """Remove the logo and its preview."""
        self._replace_logo(None)

    @rx.event(background=True)
    async def submit(self):
        """
        Save the invoice, render it and download the document.

        The draft is captured once; edits made while the submission runs
        stay on the draft for the next attempt.
        """
        async with self:
            if self.is_submitting:
                return
            draft = self._draft_model().draft
            self.is_submitting = True

        async def _publish(status: SubmissionStatus) -> None:
            async with self:
                self.submission_status = status.value

        try:
            outcome = await run_submission(
                draft, get_invoice_service, on_status=_publish
            )
        finally:
            async with self:
                self.is_submitting = False

        if outcome.succeeded:
            return rx.download(data=outcome.document.content, filename=outcome.filename)
        return rx.window_alert(outcome.message)

    def _draft_model(self) -> DraftModel:
        if self._model is None:
            self._model = DraftModel(InvoiceDraft.new())
        return self._model

    def _replace_logo(self, logo: Logo | None) -> None:
        """Set the logo and delete the preview file it replaces."""
        model = self._draft_model()
        previous = model.draft.logo
        model.set_logo(logo)
        if previous is not None and previous.preview:
            paths.discard_upload(rx.get_upload_dir(), previous.preview)
        self._sync()

    def _sync(self) -> None:
        """Copy the draft and freshly computed totals into frontend vars."""
        draft = self._draft_model().draft
        totals = draft.totals()

        self.invoice_number = draft.invoice_number
        self.invoice_date = draft.invoice_date.isoformat() if draft.invoice_date else ""
        self.due_date = draft.due_date.isoformat() if draft.due_date else ""
        self.bill_to_name = draft.bill_to.name
        self.bill_to_email = draft.bill_to.email
        self.bill_to_address = draft.bill_to.address
        self.notes = draft.notes
        self.items = [_item_row(item) for item in draft.items]
        self.logo_preview = draft.logo.preview if draft.logo else ""

        self.invoice_date_display = format_date(draft.invoice_date)
        self.due_date_display = format_date(draft.due_date)
        self.subtotal_display = format_currency(totals.subtotal, CURRENCY)
        self.tax_display = format_currency(totals.tax, CURRENCY)
        self.grand_total_display = format_currency(totals.grand_total, CURRENCY)
