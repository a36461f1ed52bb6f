"""
Small shared library modules for the Invoice Composer.

Modules:
    logs: Logger factory used by every module (``LOG = logs.logger(__file__)``)
    objects: JSON serialization of dataclasses and dates
    paths: Storage of uploaded logo previews
"""

from invoice_composer.lib import logs, objects, paths

__all__ = ["logs", "objects", "paths"]
