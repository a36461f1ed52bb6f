"""
Error taxonomy for the Invoice Composer.

Every error carries a user-facing message. ValidationError never reaches
the network layer; PersistError and RenderError describe the two backend
calls of a submission.
"""


class InvoiceComposerError(Exception):
    """Base class for all errors surfaced to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(InvoiceComposerError):
    """
    A draft field failed a local check.

    Attributes:
        field: Draft field path that failed (e.g. ``bill_to.email``).
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class PersistError(InvoiceComposerError):
    """The persist endpoint could not be reached or rejected the invoice."""

    def __init__(self, message: str = "Could not save the invoice.") -> None:
        super().__init__(message)


class RenderError(InvoiceComposerError):
    """The render endpoint could not produce the invoice document."""

    def __init__(
        self, message: str = "Could not generate the invoice document."
    ) -> None:
        super().__init__(message)


class SubmissionBusyError(InvoiceComposerError):
    """A submission was started while another one is still running."""

    def __init__(self, message: str = "A submission is already in progress.") -> None:
        super().__init__(message)
