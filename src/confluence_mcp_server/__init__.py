"""Confluence MCP Server

Attachment management for Confluence content: endpoint construction,
create/update/delete/lookup operations and create-or-update reconciliation
of local files against a page's attachments.
"""

from .attachments import AttachmentOperations
from .client import ConfluenceTransport, Transport
from .config import ConfluenceConfig
from .models.attachment import Attachment, AttachmentList
from .reconcile import SyncOutcome, SyncResult, add_update_attachments

__all__ = [
    "Attachment",
    "AttachmentList",
    "AttachmentOperations",
    "ConfluenceConfig",
    "ConfluenceTransport",
    "SyncOutcome",
    "SyncResult",
    "Transport",
    "add_update_attachments",
]
