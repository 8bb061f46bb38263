"""
Attachment helpers.

Local files are read as raw bytes and base64-encoded before they go into a
message. A file that cannot be read is skipped with a warning so the send can
proceed without it.
"""

import base64
import os
from typing import Optional

from mandrill_demo.core.models import Attachment
from mandrill_demo.observability.logger import log_warning


MIME_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".json": "application/json",
    ".zip": "application/zip",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(filename: str) -> str:
    """Map a filename extension to a MIME type, case-insensitively."""
    _, ext = os.path.splitext(filename)
    return MIME_TYPES.get(ext.lower(), DEFAULT_MIME_TYPE)


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def encode_text(text: str) -> str:
    return encode_bytes(text.encode("utf-8"))


def read_file_as_base64(path: str) -> Optional[str]:
    """
    Read a local file and return its base64-encoded contents.

    Returns:
        The encoded contents, or None if the file is missing or unreadable
    """
    if not os.path.isfile(path):
        log_warning(f"File not found: {path}", {"path": path})
        return None
    try:
        with open(path, "rb") as f:
            return encode_bytes(f.read())
    except OSError as exc:
        log_warning(f"Could not read file {path}: {exc}", {"path": path})
        return None


def attachment_from_file(path: str, name: Optional[str] = None) -> Optional[Attachment]:
    filename = name or os.path.basename(path)
    content = read_file_as_base64(path)
    if content is None:
        log_warning(f"{filename} not found, skipping attachment", {"path": path})
        return None
    return Attachment(type=get_mime_type(filename), name=filename, content=content)


def attachment_from_text(name: str, text: str, mime_type: Optional[str] = None) -> Attachment:
    return Attachment(type=mime_type or get_mime_type(name), name=name, content=encode_text(text))
