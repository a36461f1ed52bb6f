"""
Reflex application entry point for the Invoice Composer.

This module initializes the Reflex app and defines the main page layout:
the editing form on the left and the live preview on the right.
"""

import os

import reflex as rx

from invoice_composer.components import invoice_form, invoice_preview
from invoice_composer.lib import logs
from invoice_composer.state import APP_TITLE, ComposerState

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("INVOICE_COMPOSER_PORT", "3000"))
LOG.info(
    "INVOICE_COMPOSER_SERVICE: %s",
    os.getenv("INVOICE_COMPOSER_SERVICE", "http"),
)


def page_header() -> rx.Component:
    """Build the title at the top of the page."""
    return rx.box(
        rx.heading(APP_TITLE, size="7", as_="h1"),
        class_name="page-header",
    )


def index() -> rx.Component:
    """
    Build the main page layout.

    Returns:
        The complete page component with header, form and preview.
    """
    return rx.box(
        rx.box(
            page_header(),
            rx.box(
                invoice_form(),
                invoice_preview(),
                class_name="composer-grid",
            ),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=["/styles.css"],
)

# Add the index page
app.add_page(
    index,
    title=APP_TITLE,
    on_load=ComposerState.on_load,
)


def main() -> None:
    """Entrypoint used by the ``invoice-composer`` console script."""
    import subprocess
    import sys

    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--frontend-port", str(APP_PORT)]
    )


if __name__ == "__main__":
    main()
