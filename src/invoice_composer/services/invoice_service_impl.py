"""
httpx-backed implementation of InvoiceService.

Talks to the invoice REST backend:
- POST {base}/api/invoices with a multipart body (``invoice`` JSON part and
  an optional ``logo`` part) returns the saved invoice as JSON
- GET {base}/api/invoices/{id}/pdf returns the rendered document

A fresh AsyncClient is opened per call so the service can be shared
across event loops. Timeouts are left to httpx.
"""

import os

import httpx

from invoice_composer.errors import PersistError, RenderError
from invoice_composer.lib import logs, objects
from invoice_composer.models.invoice import (
    Logo,
    RenderedDocument,
    SubmissionResult,
    deserialize_submission_result,
)
from invoice_composer.services.invoice_service import InvoiceService

LOG = logs.logger(__file__)

_API_URL_KEY = "INVOICE_COMPOSER_API_URL"
_DEFAULT_API_URL = "http://localhost:8083"
_TIMEOUT_KEY = "INVOICE_COMPOSER_TIMEOUT"
_DEFAULT_TIMEOUT = 30.0


class HttpInvoiceService(InvoiceService):
    """
    Invoice service backed by the REST API.

    Attributes:
        base_url: Backend root URL, without the /api suffix.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            base_url: Backend URL, or None to read INVOICE_COMPOSER_API_URL.
            timeout: Seconds, or None to read INVOICE_COMPOSER_TIMEOUT.
            transport: Optional httpx transport (used by tests).
        """
        url = base_url or os.getenv(_API_URL_KEY, _DEFAULT_API_URL)
        self.base_url = url.rstrip("/")
        self.timeout = (
            timeout
            if timeout is not None
            else float(os.getenv(_TIMEOUT_KEY, _DEFAULT_TIMEOUT))
        )
        self._transport = transport

    async def save_invoice(
        self, payload: dict, logo: Logo | None = None
    ) -> SubmissionResult:
        """Send the multipart persist request and parse the saved invoice."""
        files = {
            "invoice": (
                "invoice.json",
                objects.to_json_bytes(payload),
                "application/json",
            )
        }
        if logo is not None:
            files["logo"] = (logo.filename, logo.content, logo.content_type)

        LOG.info(
            "save_invoice - invoice_number:%s items:%s logo:%s",
            payload.get("invoiceNumber"),
            len(payload.get("items", [])),
            logo is not None,
        )
        try:
            async with self._client() as client:
                response = await client.post("/api/invoices", files=files)
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PersistError() from exc

        try:
            return deserialize_submission_result(
                body, fallback_number=payload.get("invoiceNumber", "")
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise PersistError() from exc

    async def render_invoice(self, invoice_id: str) -> RenderedDocument:
        """Download the rendered document for a saved invoice."""
        LOG.info("render_invoice - id:%s", invoice_id)
        try:
            async with self._client() as client:
                response = await client.get(f"/api/invoices/{invoice_id}/pdf")
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RenderError() from exc

        return RenderedDocument(
            content=response.content,
            media_type=response.headers.get("content-type", "application/pdf"),
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )
