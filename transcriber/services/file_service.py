"""Scratch storage for uploaded audio files."""
from __future__ import annotations

import os
import uuid
from typing import Iterable

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..errors import FileValidationError


def allowed_file(filename: str, allowed: Iterable[str]) -> bool:
    """Check if the file has an allowed extension"""
    if not filename or "." not in filename:
        return False
    ext = filename.rsplit(".", 1)[1].lower()
    return ext in allowed


def ensure_upload_dir(folder: str) -> None:
    os.makedirs(folder, exist_ok=True)


def save_upload(file: FileStorage, folder: str, allowed: Iterable[str]) -> str:
    """Validate the extension and write the upload under a unique name.

    Returns the path of the scratch file.
    """
    if not allowed_file(file.filename or "", allowed):
        raise FileValidationError("Invalid file type")

    safe = secure_filename(file.filename) or "upload"
    ensure_upload_dir(folder)
    path = os.path.join(folder, f"{uuid.uuid4().hex}_{safe}")
    file.save(path)
    return path


def cleanup_file(path: str | None) -> None:
    """Clean up a file after processing"""
    if path and os.path.exists(path):
        os.remove(path)
