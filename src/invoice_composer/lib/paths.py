"""
Path utilities for the Invoice Composer.

Logo previews are written to the Reflex upload directory under a unique
name; these helpers store them and remove the ones that are replaced.
"""

import uuid
from pathlib import Path


def store_upload(upload_dir: Path, filename: str, content: bytes) -> str:
    """
    Write an uploaded file under a unique name.

    Args:
        upload_dir: Directory served as uploads; created if missing.
        filename: Original file name. Any directory part is dropped.
        content: File bytes.

    Returns:
        The stored name, relative to upload_dir.
    """
    name = f"{uuid.uuid4().hex}-{Path(filename).name or 'upload'}"
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / name).write_bytes(content)
    return name


def discard_upload(upload_dir: Path, name: str) -> None:
    """Delete a stored upload. Empty or already missing names are ignored."""
    if not name:
        return
    (upload_dir / Path(name).name).unlink(missing_ok=True)
