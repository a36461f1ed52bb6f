import asyncio
from dataclasses import replace

import pytest

from invoice_composer.draft import DraftModel
from invoice_composer.errors import (
    PersistError,
    RenderError,
    SubmissionBusyError,
    ValidationError,
)
from invoice_composer.models.invoice import (
    InvoiceDraft,
    Logo,
    RenderedDocument,
    SubmissionResult,
)
from invoice_composer.services.invoice_service import InvoiceService
from invoice_composer.workflow import (
    SubmissionEvent,
    SubmissionStatus,
    SubmissionWorkflow,
    run_submission,
    transition,
)


class FakeInvoiceService(InvoiceService):
    def __init__(
        self,
        save_error: Exception | None = None,
        render_error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.save_error = save_error
        self.render_error = render_error
        self.gate = gate
        self.saved: list[tuple[dict, Logo | None]] = []
        self.rendered: list[str] = []

    async def save_invoice(
        self, payload: dict, logo: Logo | None = None
    ) -> SubmissionResult:
        self.saved.append((payload, logo))
        if self.gate is not None:
            await self.gate.wait()
        if self.save_error is not None:
            raise self.save_error
        return SubmissionResult(id="42", invoice_number=payload["invoiceNumber"])

    async def render_invoice(self, invoice_id: str) -> RenderedDocument:
        self.rendered.append(invoice_id)
        if self.render_error is not None:
            raise self.render_error
        return RenderedDocument(content=b"%PDF-1.4 fake", media_type="application/pdf")


class StatusRecorder:
    def __init__(self) -> None:
        self.statuses: list[SubmissionStatus] = []

    async def __call__(self, status: SubmissionStatus) -> None:
        self.statuses.append(status)


def test_transition_table() -> None:
    assert (
        transition(SubmissionStatus.IDLE, SubmissionEvent.START)
        is SubmissionStatus.IN_PROGRESS
    )
    assert (
        transition(SubmissionStatus.IN_PROGRESS, SubmissionEvent.SUCCEED)
        is SubmissionStatus.SUCCESS
    )
    assert (
        transition(SubmissionStatus.IN_PROGRESS, SubmissionEvent.FAIL)
        is SubmissionStatus.FAILED
    )
    assert (
        transition(SubmissionStatus.SUCCESS, SubmissionEvent.RESET)
        is SubmissionStatus.IDLE
    )
    assert (
        transition(SubmissionStatus.FAILED, SubmissionEvent.RESET)
        is SubmissionStatus.IDLE
    )


@pytest.mark.parametrize(
    ("status", "event"),
    [
        (SubmissionStatus.IDLE, SubmissionEvent.SUCCEED),
        (SubmissionStatus.IDLE, SubmissionEvent.RESET),
        (SubmissionStatus.IN_PROGRESS, SubmissionEvent.START),
        (SubmissionStatus.IN_PROGRESS, SubmissionEvent.RESET),
        (SubmissionStatus.SUCCESS, SubmissionEvent.FAIL),
        (SubmissionStatus.FAILED, SubmissionEvent.START),
    ],
)
def test_transition_rejects_invalid_moves(
    status: SubmissionStatus, event: SubmissionEvent
) -> None:
    with pytest.raises(ValueError):
        transition(status, event)


def test_blank_invoice_number_makes_no_network_calls(
    valid_draft: InvoiceDraft,
) -> None:
    service = FakeInvoiceService()
    recorder = StatusRecorder()
    workflow = SubmissionWorkflow(service, on_status=recorder)

    outcome = asyncio.run(workflow.submit(replace(valid_draft, invoice_number="")))

    assert outcome.status is SubmissionStatus.IDLE
    assert isinstance(outcome.error, ValidationError)
    assert outcome.message == "Invoice number is required."
    assert service.saved == []
    assert service.rendered == []
    assert recorder.statuses == []
    assert workflow.status is SubmissionStatus.IDLE


def test_invalid_email_is_rejected(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService()
    draft = replace(
        valid_draft, bill_to=replace(valid_draft.bill_to, email="not-an-email")
    )

    outcome = asyncio.run(SubmissionWorkflow(service).submit(draft))

    assert isinstance(outcome.error, ValidationError)
    assert outcome.error.field == "bill_to.email"
    assert service.saved == []


def test_successful_submission(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService()
    recorder = StatusRecorder()
    workflow = SubmissionWorkflow(service, on_status=recorder)

    outcome = asyncio.run(workflow.submit(valid_draft))

    assert outcome.succeeded
    assert outcome.status is SubmissionStatus.SUCCESS
    assert outcome.result == SubmissionResult(id="42", invoice_number="INV-1")
    assert outcome.filename == "invoice-INV-1.pdf"
    assert outcome.document.content == b"%PDF-1.4 fake"
    assert outcome.message == ""
    assert service.rendered == ["42"]
    assert recorder.statuses == [
        SubmissionStatus.IN_PROGRESS,
        SubmissionStatus.SUCCESS,
        SubmissionStatus.IDLE,
    ]
    assert workflow.status is SubmissionStatus.IDLE


def test_logo_bytes_are_sent(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService()
    logo = Logo(content=b"png-bytes", filename="logo.png", preview="abc-logo.png")

    asyncio.run(SubmissionWorkflow(service).submit(replace(valid_draft, logo=logo)))

    payload, sent_logo = service.saved[0]
    assert sent_logo is logo
    assert "logo" not in payload


def test_persist_failure_skips_render(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService(save_error=PersistError())
    recorder = StatusRecorder()
    workflow = SubmissionWorkflow(service, on_status=recorder)

    outcome = asyncio.run(workflow.submit(valid_draft))

    assert outcome.status is SubmissionStatus.FAILED
    assert isinstance(outcome.error, PersistError)
    assert outcome.message == "Could not save the invoice."
    assert service.rendered == []
    assert recorder.statuses == [
        SubmissionStatus.IN_PROGRESS,
        SubmissionStatus.FAILED,
        SubmissionStatus.IDLE,
    ]
    assert workflow.status is SubmissionStatus.IDLE


def test_render_failure_then_explicit_retry(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService(render_error=RenderError())
    workflow = SubmissionWorkflow(service)

    outcome = asyncio.run(workflow.submit(valid_draft))

    assert outcome.status is SubmissionStatus.FAILED
    assert isinstance(outcome.error, RenderError)
    assert outcome.message == "Could not generate the invoice document."
    assert outcome.result == SubmissionResult(id="42", invoice_number="INV-1")
    assert len(service.saved) == 1
    assert not workflow.is_busy

    service.render_error = None
    retry = asyncio.run(workflow.submit(valid_draft))

    assert retry.succeeded
    assert len(service.saved) == 2


def test_second_submit_while_running_is_refused(valid_draft: InvoiceDraft) -> None:
    async def scenario():
        gate = asyncio.Event()
        service = FakeInvoiceService(gate=gate)
        workflow = SubmissionWorkflow(service)

        first = asyncio.create_task(workflow.submit(valid_draft))
        await asyncio.sleep(0)
        assert workflow.status is SubmissionStatus.IN_PROGRESS

        with pytest.raises(SubmissionBusyError):
            await workflow.submit(valid_draft)

        gate.set()
        return await first, service

    outcome, service = asyncio.run(scenario())

    assert outcome.succeeded
    assert len(service.saved) == 1


def test_edits_during_submission_do_not_change_payload(
    valid_draft: InvoiceDraft,
) -> None:
    async def scenario():
        gate = asyncio.Event()
        service = FakeInvoiceService(gate=gate)
        model = DraftModel(valid_draft)

        task = asyncio.create_task(SubmissionWorkflow(service).submit(model.draft))
        await asyncio.sleep(0)
        model.set_field("invoice_number", "INV-CHANGED")
        model.edit_item(0, "quantity", "99")
        gate.set()
        return await task, service, model

    outcome, service, model = asyncio.run(scenario())

    payload, _ = service.saved[0]
    assert payload["invoiceNumber"] == "INV-1"
    assert payload["items"][0]["quantity"] == 2
    assert outcome.filename == "invoice-INV-1.pdf"
    assert model.draft.invoice_number == "INV-CHANGED"


def test_removing_last_item_fails_validation(valid_draft: InvoiceDraft) -> None:
    model = DraftModel(valid_draft)
    model.remove_item(0)
    service = FakeInvoiceService()

    outcome = asyncio.run(SubmissionWorkflow(service).submit(model.draft))

    assert isinstance(outcome.error, ValidationError)
    assert outcome.error.field == "items"
    assert service.saved == []


def test_unexpected_error_still_returns_to_idle(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService(save_error=RuntimeError("boom"))
    recorder = StatusRecorder()
    workflow = SubmissionWorkflow(service, on_status=recorder)

    with pytest.raises(RuntimeError):
        asyncio.run(workflow.submit(valid_draft))

    assert workflow.status is SubmissionStatus.IDLE
    assert recorder.statuses == [
        SubmissionStatus.IN_PROGRESS,
        SubmissionStatus.FAILED,
        SubmissionStatus.IDLE,
    ]


def test_run_submission_reports_service_setup_failure(
    valid_draft: InvoiceDraft,
) -> None:
    def broken_factory() -> InvoiceService:
        raise ValueError("Unknown invoice service: 'htp'")

    outcome = asyncio.run(run_submission(valid_draft, broken_factory))

    assert outcome.status is SubmissionStatus.FAILED
    assert isinstance(outcome.error, PersistError)
    assert outcome.message == "Could not save the invoice."


def test_run_submission_reports_unexpected_service_error(
    valid_draft: InvoiceDraft,
) -> None:
    service = FakeInvoiceService(save_error=RuntimeError("boom"))
    recorder = StatusRecorder()

    outcome = asyncio.run(
        run_submission(valid_draft, lambda: service, on_status=recorder)
    )

    assert not outcome.succeeded
    assert outcome.message == "Could not save the invoice."
    assert recorder.statuses[-1] is SubmissionStatus.IDLE


def test_run_submission_passes_success_through(valid_draft: InvoiceDraft) -> None:
    service = FakeInvoiceService()

    outcome = asyncio.run(run_submission(valid_draft, lambda: service))

    assert outcome.succeeded
    assert outcome.filename == "invoice-INV-1.pdf"
