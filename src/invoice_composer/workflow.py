"""
Save-then-render submission workflow.

A submission validates a draft snapshot, persists it, renders the saved
invoice and hands back the document for download. Progress is a single
status signal:

    IDLE -> IN_PROGRESS -> SUCCESS | FAILED -> IDLE

The render call always waits for the persist result because it needs the
returned id. There are no retries and no cancellation; every run ends
back in IDLE so the user can submit again.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from invoice_composer.errors import (
    InvoiceComposerError,
    PersistError,
    RenderError,
    SubmissionBusyError,
    ValidationError,
)
from invoice_composer.lib import logs
from invoice_composer.models.invoice import (
    InvoiceDraft,
    Logo,
    RenderedDocument,
    SubmissionResult,
    serialize_invoice,
)
from invoice_composer.services.invoice_service import InvoiceService
from invoice_composer.validation import validate_draft

LOG = logs.logger(__file__)


class SubmissionStatus(str, Enum):
    """Progress of a submission."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionEvent(str, Enum):
    """Inputs that move a submission between statuses."""

    START = "start"
    SUCCEED = "succeed"
    FAIL = "fail"
    RESET = "reset"


_TRANSITIONS: dict[tuple[SubmissionStatus, SubmissionEvent], SubmissionStatus] = {
    (SubmissionStatus.IDLE, SubmissionEvent.START): SubmissionStatus.IN_PROGRESS,
    (SubmissionStatus.IN_PROGRESS, SubmissionEvent.SUCCEED): SubmissionStatus.SUCCESS,
    (SubmissionStatus.IN_PROGRESS, SubmissionEvent.FAIL): SubmissionStatus.FAILED,
    (SubmissionStatus.SUCCESS, SubmissionEvent.RESET): SubmissionStatus.IDLE,
    (SubmissionStatus.FAILED, SubmissionEvent.RESET): SubmissionStatus.IDLE,
}


def transition(status: SubmissionStatus, event: SubmissionEvent) -> SubmissionStatus:
    """
    Return the status that follows ``status`` on ``event``.

    Raises:
        ValueError: If the event is not allowed in the given status.
    """
    try:
        return _TRANSITIONS[(status, event)]
    except KeyError as exc:
        msg = f"Invalid submission transition: {status.value} on {event.value}"
        raise ValueError(msg) from exc


StatusListener = Callable[[SubmissionStatus], Awaitable[None]]


@dataclass(slots=True)
class SubmissionOutcome:
    """
    Result of one submit call.

    Attributes:
        status: SUCCESS or FAILED, or IDLE when validation rejected the
            draft before anything was sent.
        error: The error to show the user, if any.
        result: Persist result, when the invoice was saved.
        document: Rendered document, on success.
        filename: Download file name, on success.
    """

    status: SubmissionStatus
    error: InvoiceComposerError | None = None
    result: SubmissionResult | None = None
    document: RenderedDocument | None = None
    filename: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is SubmissionStatus.SUCCESS

    @property
    def message(self) -> str:
        """User-facing message for the failure, or an empty string."""
        return self.error.message if self.error else ""


class SubmissionWorkflow:
    """
    Runs submissions against an InvoiceService.

    Attributes:
        service: Backend used for the persist and render calls.
        status: Current status; IDLE whenever no submission is running.
    """

    def __init__(
        self, service: InvoiceService, on_status: StatusListener | None = None
    ) -> None:
        """
        Initialize an idle workflow.

        Args:
            service: Backend used for the persist and render calls.
            on_status: Optional coroutine called after every status change.
        """
        self.service = service
        self.status = SubmissionStatus.IDLE
        self._on_status = on_status

    @property
    def is_busy(self) -> bool:
        return self.status is not SubmissionStatus.IDLE

    async def submit(self, draft: InvoiceDraft) -> SubmissionOutcome:
        """
        Validate, persist and render a draft.

        The payload is captured from ``draft`` before the first await, so
        later edits to the composer do not reach this submission.

        Args:
            draft: Snapshot of the draft to submit.

        Returns:
            The outcome; the workflow is back in IDLE.

        Raises:
            SubmissionBusyError: If a submission is already running.
        """
        if self.is_busy:
            raise SubmissionBusyError()

        try:
            validate_draft(draft)
        except ValidationError as exc:
            LOG.info("Submission rejected - field:%s", exc.field)
            return SubmissionOutcome(status=SubmissionStatus.IDLE, error=exc)

        payload = serialize_invoice(draft)
        try:
            await self._advance(SubmissionEvent.START)
            return await self._persist_and_render(payload, draft.logo)
        finally:
            if self.status is SubmissionStatus.IN_PROGRESS:
                await self._advance(SubmissionEvent.FAIL)
            await self._advance(SubmissionEvent.RESET)

    async def _persist_and_render(
        self, payload: dict, logo: Logo | None
    ) -> SubmissionOutcome:
        invoice_number = payload["invoiceNumber"]
        try:
            result = await self.service.save_invoice(payload, logo)
        except PersistError as exc:
            LOG.error(
                "Persist failed - invoice_number:%s", invoice_number, exc_info=True
            )
            await self._advance(SubmissionEvent.FAIL)
            return SubmissionOutcome(status=SubmissionStatus.FAILED, error=exc)

        LOG.info("Invoice saved - id:%s number:%s", result.id, result.invoice_number)
        try:
            document = await self.service.render_invoice(result.id)
        except RenderError as exc:
            LOG.error("Render failed - id:%s", result.id, exc_info=True)
            await self._advance(SubmissionEvent.FAIL)
            return SubmissionOutcome(
                status=SubmissionStatus.FAILED, error=exc, result=result
            )

        filename = document.filename(result.invoice_number)
        LOG.info("Invoice rendered - id:%s filename:%s", result.id, filename)
        await self._advance(SubmissionEvent.SUCCEED)
        return SubmissionOutcome(
            status=SubmissionStatus.SUCCESS,
            result=result,
            document=document,
            filename=filename,
        )

    async def _advance(self, event: SubmissionEvent) -> None:
        self.status = transition(self.status, event)
        LOG.debug(
            "Submission status - event:%s status:%s", event.value, self.status.value
        )
        if self._on_status is not None:
            await self._on_status(self.status)


async def run_submission(
    draft: InvoiceDraft,
    service_factory: Callable[[], InvoiceService],
    on_status: StatusListener | None = None,
) -> SubmissionOutcome:
    """
    Run one submission and turn any failure into an outcome for the user.

    Errors outside the submission taxonomy (a misconfigured service, a
    malformed backend URL) are logged and reported as a save failure.

    Args:
        draft: Snapshot of the draft to submit.
        service_factory: Returns the InvoiceService to use.
        on_status: Optional coroutine called after every status change.
    """
    try:
        workflow = SubmissionWorkflow(service_factory(), on_status=on_status)
        return await workflow.submit(draft)
    except Exception:
        LOG.error(
            "Submission failed - invoice_number:%s",
            draft.invoice_number,
            exc_info=True,
        )
        return SubmissionOutcome(status=SubmissionStatus.FAILED, error=PersistError())
