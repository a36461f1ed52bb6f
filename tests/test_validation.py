from dataclasses import replace

import pytest

from invoice_composer.errors import ValidationError
from invoice_composer.models.invoice import BillTo, InvoiceDraft, LineItem
from invoice_composer.validation import is_valid_email, validate_draft


def test_valid_draft_passes(valid_draft: InvoiceDraft) -> None:
    validate_draft(valid_draft)


@pytest.mark.parametrize(
    ("changes", "field", "message"),
    [
        ({"invoice_number": "   "}, "invoice_number", "Invoice number is required."),
        ({"invoice_date": None}, "invoice_date", "Invoice date is required."),
        ({"due_date": None}, "due_date", "Due date is required."),
        ({"items": ()}, "items", "At least one valid item is required."),
        (
            {"items": (LineItem("", 1, 10.0),)},
            "items",
            "At least one valid item is required.",
        ),
        (
            {"items": (LineItem("Widget", 1, 0.0),)},
            "items",
            "At least one valid item is required.",
        ),
    ],
)
def test_validation_failures(
    valid_draft: InvoiceDraft, changes: dict, field: str, message: str
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_draft(replace(valid_draft, **changes))

    assert exc_info.value.field == field
    assert exc_info.value.message == message


@pytest.mark.parametrize(
    ("bill_to", "field"),
    [
        (BillTo(name=" ", address="1 Main", email="a@b.co"), "bill_to.name"),
        (BillTo(name="Acme", address="1 Main", email="not-an-email"), "bill_to.email"),
        (BillTo(name="Acme", address="", email="a@b.co"), "bill_to.address"),
    ],
)
def test_bill_to_failures(
    valid_draft: InvoiceDraft, bill_to: BillTo, field: str
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_draft(replace(valid_draft, bill_to=bill_to))

    assert exc_info.value.field == field


def test_first_failure_wins() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_draft(InvoiceDraft(items=()))

    assert exc_info.value.field == "invoice_number"


def test_only_first_item_is_checked(valid_draft: InvoiceDraft) -> None:
    draft = replace(valid_draft, items=valid_draft.items + (LineItem(),))

    validate_draft(draft)


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("a@b.co", True),
        ("first.last@example.co.uk", True),
        ("not-an-email", False),
        ("", False),
        ("a@b", False),
        ("a b@c.de", False),
        ("@b.co", False),
        ("a@@b.co", False),
    ],
)
def test_is_valid_email(email: str, expected: bool) -> None:
    assert is_valid_email(email) is expected
