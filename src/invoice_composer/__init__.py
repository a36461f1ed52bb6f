"""
Invoice Composer: a Reflex application for building and downloading invoices.

The user fills in invoice header fields, the billed party, line items, an
optional logo and notes, watches a live preview with computed totals, and
downloads a document rendered by the invoice backend.

Subpackages:
- components: Reflex UI components (form and preview)
- models: Draft dataclasses and serialization
- services: Invoice backend access (http and demo implementations)
- lib: Logging and JSON helpers
- utils: Parsing and formatting helpers

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
