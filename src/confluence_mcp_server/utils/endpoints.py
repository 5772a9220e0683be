"""Confluence Attachment Endpoint Utilities

Builds REST endpoints under {base}/content/{contentID}/child/attachment.
Identifiers are percent-encoded as single path segments, so distinct
(content, attachment) pairs never produce the same URL.
"""

from typing import Optional
from urllib.parse import quote, urlencode, urlsplit

from .errors import MalformedEndpointError, UnrecognizedIDFormatError

ATTACHMENT_ID_PREFIX = "att"


def _validate_base_url(base_url: str) -> str:
    if not base_url or not base_url.strip():
        raise MalformedEndpointError("Base URL cannot be empty")

    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise MalformedEndpointError(
            f"Base URL must be an absolute http(s) URL: {base_url}",
            details={"base_url": base_url}
        )
    if parts.query or parts.fragment:
        raise MalformedEndpointError(
            f"Base URL cannot carry a query or fragment: {base_url}",
            details={"base_url": base_url}
        )
    return base_url.rstrip("/")


def _segment(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise MalformedEndpointError(f"{name} cannot be empty")
    return quote(str(value), safe="")


def attachments_url(base_url: str, content_id: str) -> str:
    """Collection endpoint for a content's attachments.

    Args:
        base_url: REST API root (e.g. https://example.atlassian.net/wiki/rest/api)
        content_id: Page or blog post ID

    Returns:
        {base}/content/{content_id}/child/attachment

    Raises:
        MalformedEndpointError: If base URL or content ID is invalid
    """
    root = _validate_base_url(base_url)
    return f"{root}/content/{_segment(content_id, 'Content ID')}/child/attachment"


def attachment_url(base_url: str, content_id: str, attachment_id: str) -> str:
    """Endpoint of a single attachment."""
    collection = attachments_url(base_url, content_id)
    return f"{collection}/{_segment(attachment_id, 'Attachment ID')}"


def attachment_data_url(base_url: str, content_id: str, attachment_id: str) -> str:
    """Binary upload sub-resource of a single attachment."""
    return f"{attachment_url(base_url, content_id, attachment_id)}/data"


def filename_query_url(base_url: str, content_id: str, filename: str) -> str:
    """Collection endpoint filtered to attachments with the given file name."""
    collection = attachments_url(base_url, content_id)
    if not filename or not filename.strip():
        raise MalformedEndpointError("Filename cannot be empty")
    return f"{collection}?{urlencode({'filename': filename}, quote_via=quote)}"


def strip_type_prefix(attachment_id: str) -> str:
    """Strip the 'att' type prefix Confluence puts on attachment IDs.

    The bare numeric part is what the /attachment/{id}/data path expects.

    Args:
        attachment_id: Attachment ID as returned by the service

    Returns:
        The ID without its type prefix

    Raises:
        UnrecognizedIDFormatError: If the prefix is missing or nothing follows it
    """
    if not attachment_id or not attachment_id.startswith(ATTACHMENT_ID_PREFIX):
        raise UnrecognizedIDFormatError(
            f"Attachment ID '{attachment_id}' does not start with '{ATTACHMENT_ID_PREFIX}'",
            details={"attachment_id": attachment_id}
        )

    stripped = attachment_id[len(ATTACHMENT_ID_PREFIX):]
    if not stripped:
        raise UnrecognizedIDFormatError(
            f"Attachment ID '{attachment_id}' has nothing after its prefix",
            details={"attachment_id": attachment_id}
        )
    return stripped
