"""Confluence Attachment Operations

Create, update, delete and lookup of the attachments of a Confluence page
or blog post. Each operation is a single request/response exchange over
the injected transport; nothing is cached between calls.
"""

import logging

from .client import Transport
from .models.attachment import Attachment
from .utils import endpoints
from .utils.codec import (
    PathLike,
    build_upload_body,
    decode_attachment,
    decode_attachment_list,
    first_attachment,
)

logger = logging.getLogger(__name__)


class AttachmentOperations:
    """Attachment CRUD against one Confluence REST API root.

    Errors raised by every method:
        MalformedEndpointError: Empty IDs or bad base URL (nothing is sent)
        TransportError: Network failure or non-2xx status
    """

    def __init__(self, base_url: str, transport: Transport):
        """Initialize attachment operations.

        Args:
            base_url: REST API root (e.g. https://example.atlassian.net/wiki/rest/api)
            transport: Collaborator that executes authenticated requests
        """
        self.base_url = base_url
        self.transport = transport

    def get(self, content_id: str, attachment_id: str) -> Attachment:
        """Fetch a single attachment by ID.

        Raises:
            NotFoundError: If the service returns an empty result list
            DecodeError: If the response is not an attachment list
        """
        url = endpoints.attachment_url(self.base_url, content_id, attachment_id)
        logger.info(f"Getting attachment {attachment_id} of content {content_id}")

        body = self.transport.send("GET", url)
        return first_attachment(
            decode_attachment_list(body),
            f"attachment {attachment_id} of content {content_id}"
        )

    def get_by_filename(self, content_id: str, filename: str) -> Attachment:
        """Fetch the attachment with the given file name.

        If several attachments share the name, the first one listed wins.

        Raises:
            NotFoundError: If no attachment has that name
            DecodeError: If the response is not an attachment list
        """
        url = endpoints.filename_query_url(self.base_url, content_id, filename)
        logger.info(f"Looking up attachment '{filename}' on content {content_id}")

        body = self.transport.send("GET", url)
        attachments = decode_attachment_list(body)
        if len(attachments.results) > 1:
            logger.warning(
                f"{len(attachments.results)} attachments named '{filename}' on content "
                f"{content_id}, using {attachments.results[0].id}"
            )
        return first_attachment(attachments, f"filename '{filename}' on content {content_id}")

    def delete(self, content_id: str, attachment_id: str) -> None:
        """Delete an attachment. Success is the absence of a transport error."""
        url = endpoints.attachment_url(self.base_url, content_id, attachment_id)
        logger.info(f"Deleting attachment {attachment_id} of content {content_id}")

        self.transport.send("DELETE", url)
        logger.info(f"Deleted attachment {attachment_id}")

    def create(self, content_id: str, path: PathLike) -> Attachment:
        """Upload a local file as a new attachment.

        Raises:
            LocalIOError: If the file cannot be read (nothing is sent)
            NotFoundError: If the response holds no attachment
            DecodeError: If the response is not an attachment list
        """
        url = endpoints.attachments_url(self.base_url, content_id)
        body, content_type = build_upload_body(path)
        logger.info(f"Creating attachment from {path} on content {content_id}")

        response = self.transport.send("POST", url, body, content_type)
        attachment = first_attachment(
            decode_attachment_list(response),
            f"upload of {path} to content {content_id}"
        )
        logger.info(f"Created attachment {attachment.id} ('{attachment.title}')")
        return attachment

    def update(
        self,
        content_id: str,
        attachment_id: str,
        path: PathLike,
        minor_edit: bool = True
    ) -> Attachment:
        """Upload a new version of an existing attachment's data.

        Args:
            content_id: Page or blog post ID
            attachment_id: Attachment ID without its type prefix
            path: Local file holding the new data
            minor_edit: Suppress watcher notifications for this version

        Raises:
            LocalIOError: If the file cannot be read (nothing is sent)
            DecodeError: If the response is not a single attachment object
        """
        url = endpoints.attachment_data_url(self.base_url, content_id, attachment_id)
        body, content_type = build_upload_body(path, minor_edit=minor_edit)
        logger.info(
            f"Updating attachment {attachment_id} of content {content_id} "
            f"from {path} (minorEdit={minor_edit})"
        )

        response = self.transport.send("POST", url, body, content_type)
        attachment = decode_attachment(response)
        logger.info(f"Updated attachment {attachment.id} to version {attachment.version_number}")
        return attachment
