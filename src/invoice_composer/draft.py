"""
Draft model: the single owner of the invoice being composed.

Every operation replaces the current InvoiceDraft with an updated copy.
Quantities and prices are clamped on every edit (quantity to at least 1,
price to at least 0) instead of being rejected, so the draft never holds
an impossible line item. Field edits are otherwise unvalidated; see
invoice_composer.validation for the submission-time checks.
"""

from dataclasses import replace
from datetime import date

from invoice_composer.errors import ValidationError
from invoice_composer.lib import logs
from invoice_composer.models.invoice import (
    BillTo,
    DerivedTotals,
    InvoiceDraft,
    LineItem,
    Logo,
    compute_totals,
)
from invoice_composer.utils import parse_date, parse_price, parse_quantity

LOG = logs.logger(__file__)

_DATE_FIELDS = {"invoice_date", "due_date"}
_TEXT_FIELDS = {"invoice_number", "notes"}
_BILL_TO_FIELDS = {"name", "address", "email"}
_ITEM_FIELDS = {"description", "quantity", "price"}

INCOMPLETE_ITEM_MESSAGE = "Please complete the last item before adding a new one."


class DraftModel:
    """
    Holds the current invoice draft and applies user edits to it.

    Attributes:
        draft: The current immutable snapshot.
    """

    def __init__(self, draft: InvoiceDraft | None = None) -> None:
        self.draft = draft or InvoiceDraft.new()

    def reset(self, today: date | None = None) -> None:
        """Replace the draft with a fresh session default."""
        self.draft = InvoiceDraft.new(today)

    def set_field(self, path: str, value: str | date | None) -> None:
        """
        Replace a top-level or ``bill_to.*`` field, keeping its siblings.

        Date fields accept a date or a string; unparsable strings are kept
        as an absent date until the user fixes them.

        Args:
            path: Field path such as ``invoice_number`` or ``bill_to.email``.
            value: New value.

        Raises:
            ValueError: If the path does not name a draft field.
        """
        head, _, nested = path.partition(".")
        if head == "bill_to" and nested in _BILL_TO_FIELDS:
            bill_to: BillTo = replace(self.draft.bill_to, **{nested: value or ""})
            self.draft = replace(self.draft, bill_to=bill_to)
        elif not nested and head in _DATE_FIELDS:
            self.draft = replace(self.draft, **{head: parse_date(value)})
        elif not nested and head in _TEXT_FIELDS:
            self.draft = replace(self.draft, **{head: value or ""})
        else:
            raise ValueError(f"Unknown draft field: {path}")

    def edit_item(
        self, index: int, field: str, raw_value: str | int | float | None
    ) -> None:
        """
        Update one field of the line item at ``index``.

        Out-of-range indexes are ignored.

        Raises:
            ValueError: If ``field`` is not a line item field.
        """
        if field not in _ITEM_FIELDS:
            raise ValueError(f"Unknown line item field: {field}")
        items = self.draft.items
        if not 0 <= index < len(items):
            LOG.debug("edit_item ignored - index:%s size:%s", index, len(items))
            return

        if field == "quantity":
            value = parse_quantity(raw_value)
        elif field == "price":
            value = parse_price(raw_value)
        else:
            value = "" if raw_value is None else str(raw_value)

        updated = replace(items[index], **{field: value})
        self.draft = replace(
            self.draft, items=items[:index] + (updated,) + items[index + 1 :]
        )

    def add_item(self) -> None:
        """
        Append a blank line item.

        Raises:
            ValidationError: If the last item has no description or no
                positive price. The draft is left unchanged.
        """
        items = self.draft.items
        if items and not items[-1].is_complete:
            raise ValidationError("items", INCOMPLETE_ITEM_MESSAGE)
        self.draft = replace(self.draft, items=items + (LineItem(),))

    def remove_item(self, index: int) -> None:
        """Remove the line item at ``index``; the list may become empty."""
        items = self.draft.items
        self.draft = replace(
            self.draft, items=tuple(item for i, item in enumerate(items) if i != index)
        )

    def set_logo(self, logo: Logo | None) -> None:
        """Replace or clear the logo bytes and preview together."""
        self.draft = replace(self.draft, logo=logo)

    def compute_totals(self) -> DerivedTotals:
        """Return totals for the current items."""
        return compute_totals(self.draft.items)
