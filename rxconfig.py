"""Reflex configuration for the Invoice Composer application."""

import reflex as rx

config = rx.Config(
    app_name="invoice_composer",
    # Use the src directory structure
    app_module_import="invoice_composer.app",
)
