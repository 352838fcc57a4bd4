"""Upload validation: presence and declared content-type only.

The bytes themselves are not sniffed; the content-type sent by the client is
trusted as-is.
"""
from __future__ import annotations

import logging

from resizepost.models import UploadedFile

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/gif")


class UploadRejected(Exception):
    """Client input error. ``message`` is safe to return to the client."""

    message = "Invalid upload."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingFile(UploadRejected):
    message = "No file uploaded."


class UnsupportedFormat(UploadRejected):
    message = "Unsupported file format."


def _normalise_content_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def validate_upload(upload: UploadedFile | None) -> UploadedFile:
    """Return *upload* unchanged if acceptable, else raise an ``UploadRejected``."""

    # Browsers submit an empty part when the file input is left blank
    if upload is None or (not upload.filename and not upload.content):
        raise MissingFile()

    content_type = _normalise_content_type(upload.content_type)
    if content_type not in ALLOWED_CONTENT_TYPES:
        logger.info("Rejected upload %r with content-type %r", upload.filename, upload.content_type)
        raise UnsupportedFormat()

    return upload
