"""
Service factory for the Invoice Composer.

This module provides the get_invoice_service() factory function that returns
the appropriate InvoiceService implementation based on configuration.

Available Implementations:
- http: REST backend reached with httpx (INVOICE_COMPOSER_API_URL)
- demo: In-memory store with a minimal PDF renderer (no backend required)

The service is cached at the module level, so the same instance is reused
across all sessions. Configure via INVOICE_COMPOSER_SERVICE.
"""

import os
from functools import cache
from typing import Callable, Dict

from invoice_composer.lib import logs
from invoice_composer.services.invoice_service import InvoiceService
from invoice_composer.services.invoice_service_demo import DemoInvoiceService
from invoice_composer.services.invoice_service_impl import HttpInvoiceService

LOG = logs.logger(__file__)

CURRENCY = os.getenv("INVOICE_COMPOSER_CURRENCY", "INR")

_SERVICE_REGISTRY: Dict[str, Callable[[], InvoiceService]] = {
    "http": lambda: HttpInvoiceService(),
    "demo": lambda: DemoInvoiceService(currency=CURRENCY),
}


@cache
def get_invoice_service(kind: str | None = None) -> InvoiceService:
    """Return the configured invoice service implementation."""
    resolved_kind = (kind or os.getenv("INVOICE_COMPOSER_SERVICE", "http")).lower()
    LOG.info("get_invoice_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown invoice service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "CURRENCY",
    "DemoInvoiceService",
    "HttpInvoiceService",
    "InvoiceService",
    "get_invoice_service",
]
