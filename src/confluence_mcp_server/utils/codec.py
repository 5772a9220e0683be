"""Confluence Attachment Codec

JSON (de)serialization of attachment responses and multipart/form-data
bodies for attachment uploads.
"""

import logging
import mimetypes
import os
from typing import Optional, Tuple, Union

from pydantic import ValidationError
from urllib3 import encode_multipart_formdata

from ..models.attachment import Attachment, AttachmentList
from .errors import DecodeError, LocalIOError, NotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def decode_attachment_list(body: bytes) -> AttachmentList:
    """Parse a `{"results": [...], "size": n}` response body.

    Raises:
        DecodeError: If the body is not JSON or does not match the shape
    """
    try:
        return AttachmentList.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Failed to decode attachment list: {e}")
        raise DecodeError(
            "Response is not a valid attachment list",
            details={"errors": e.errors(include_url=False)}
        ) from e


def decode_attachment(body: bytes) -> Attachment:
    """Parse a single attachment object (update responses are not wrapped)."""
    try:
        return Attachment.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Failed to decode attachment: {e}")
        raise DecodeError(
            "Response is not a valid attachment",
            details={"errors": e.errors(include_url=False)}
        ) from e


def encode_attachment(attachment: Attachment) -> bytes:
    """Serialize an attachment to its wire JSON shape."""
    return attachment.model_dump_json().encode("utf-8")


def first_attachment(attachments: AttachmentList, description: str) -> Attachment:
    """Return the first attachment of a list.

    Args:
        attachments: Decoded attachment list
        description: What was looked up, used in the error message

    Raises:
        NotFoundError: If the list is empty
    """
    if not attachments.results:
        raise NotFoundError(f"No attachment found for {description}")
    return attachments.results[0]


def build_upload_body(path: PathLike, minor_edit: Optional[bool] = None) -> Tuple[bytes, str]:
    """Build a multipart/form-data upload body.

    The body holds one `file` part named after the file's base name, plus a
    `minorEdit` text field when `minor_edit` is given (update uploads only).
    A fresh boundary is generated per call.

    Args:
        path: Local file to upload
        minor_edit: Value of the minorEdit field, or None to omit it

    Returns:
        Tuple of (body, content_type header value)

    Raises:
        LocalIOError: If the file cannot be opened or read
    """
    path = os.fspath(path)
    filename = os.path.basename(path)

    try:
        with open(path, "rb") as f:
            data = f.read()
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read upload source {path}: {e}")
        raise LocalIOError(
            f"Cannot read file {path}: {getattr(e, 'strerror', None) or e}",
            details={"path": path}
        ) from e

    mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    fields = [("file", (filename, data, mime_type))]
    if minor_edit is not None:
        fields.append(("minorEdit", "true" if minor_edit else "false"))

    logger.debug(f"Built upload body for {filename}: {len(data)} bytes, type={mime_type}")
    return encode_multipart_formdata(fields)
