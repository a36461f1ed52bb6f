"""
Abstract base class defining the invoice backend contract.

All invoice service implementations must extend InvoiceService and provide
the two backend calls a submission makes: persisting the invoice and
rendering the persisted invoice as a document.

Implementations:
- HttpInvoiceService: httpx client for the REST backend
- DemoInvoiceService: in-memory store with a minimal PDF renderer
"""

from abc import ABC, abstractmethod

from invoice_composer.models.invoice import Logo, RenderedDocument, SubmissionResult


class InvoiceService(ABC):
    """
    Abstract base class for the invoice backend.

    Implementations report failures only through PersistError and
    RenderError so callers can tell the two steps apart.
    """

    @abstractmethod
    async def save_invoice(
        self, payload: dict, logo: Logo | None = None
    ) -> SubmissionResult:
        """
        Persist an invoice.

        Args:
            payload: Serialized invoice (see serialize_invoice).
            logo: Optional logo whose bytes are stored with the invoice.

        Raises:
            PersistError: If the invoice could not be saved.
        """

    @abstractmethod
    async def render_invoice(self, invoice_id: str) -> RenderedDocument:
        """
        Render a previously persisted invoice.

        Args:
            invoice_id: Identifier returned by save_invoice.

        Raises:
            RenderError: If no document could be produced.
        """
