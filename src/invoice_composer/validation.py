"""
Submission-time validation of an invoice draft.

Field edits are never validated while typing; these checks run once when
the user asks for the document and stop at the first failing rule.

Only the first line item is checked for completeness. Later rows may still
be blank when the invoice is saved.
"""

import re

from invoice_composer.errors import ValidationError
from invoice_composer.models.invoice import InvoiceDraft

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    """Return True for a ``local@domain.tld`` shaped address."""
    return bool(_EMAIL_PATTERN.match(value or ""))


def validate_draft(draft: InvoiceDraft) -> None:
    """
    Check that a draft is complete enough to be saved.

    Args:
        draft: The draft snapshot to check.

    Raises:
        ValidationError: For the first failing field, with its message.
    """
    if not draft.invoice_number.strip():
        raise ValidationError("invoice_number", "Invoice number is required.")
    if not draft.invoice_date:
        raise ValidationError("invoice_date", "Invoice date is required.")
    if not draft.due_date:
        raise ValidationError("due_date", "Due date is required.")
    if not draft.bill_to.name.strip():
        raise ValidationError("bill_to.name", "Customer name is required.")
    if not is_valid_email(draft.bill_to.email):
        raise ValidationError("bill_to.email", "Please enter a valid customer email.")
    if not draft.bill_to.address.strip():
        raise ValidationError("bill_to.address", "Customer address is required.")
    if not draft.items or not draft.items[0].is_complete:
        raise ValidationError("items", "At least one valid item is required.")
