from datetime import date

import pytest

from invoice_composer.models.invoice import BillTo, InvoiceDraft, LineItem


@pytest.fixture
def valid_draft() -> InvoiceDraft:
    return InvoiceDraft(
        invoice_number="INV-1",
        invoice_date=date(2026, 10, 19),
        due_date=date(2026, 11, 3),
        bill_to=BillTo(
            name="Acme Ltd", address="1 Main Street", email="billing@acme.co"
        ),
        items=(LineItem(description="Widget", quantity=2, price=10.0),),
        notes="Net 15",
    )
