"""Confluence MCP Server - Attachment Operations Tools

This module contains all attachment operation MCP tools for Confluence:
- Get attachments by ID or file name
- Upload, update and delete attachments
- Sync a set of local files (create-or-update by file name)
"""
from typing import Dict, Any, List
import logging

from mcp.server.fastmcp import Context

from ..attachments import AttachmentOperations
from ..reconcile import add_update_attachments

logger = logging.getLogger(__name__)


def _operations(ctx: Context) -> AttachmentOperations:
    return ctx.request_context.lifespan_context["attachments"]


async def confluence_get_attachment(
    ctx: Context,
    content_id: str,
    attachment_id: str
) -> Dict[str, Any]:
    """Get a single attachment by ID.

    Args:
        ctx: MCP context with attachment operations
        content_id: Page or blog post ID
        attachment_id: Attachment ID

    Returns:
        Attachment data

    Raises:
        NotFoundError: If the service returns no attachment
    """
    logger.info(f"Executing confluence_get_attachment: content={content_id}, attachment={attachment_id}")
    attachment = _operations(ctx).get(content_id, attachment_id)
    return attachment.model_dump()


async def confluence_get_attachment_by_filename(
    ctx: Context,
    content_id: str,
    filename: str
) -> Dict[str, Any]:
    """Get the attachment of a page with the given file name.

    Args:
        ctx: MCP context with attachment operations
        content_id: Page or blog post ID
        filename: Attachment file name (first match wins on duplicates)

    Returns:
        Attachment data

    Raises:
        NotFoundError: If no attachment has that name
    """
    logger.info(f"Executing confluence_get_attachment_by_filename: content={content_id}, filename='{filename}'")
    attachment = _operations(ctx).get_by_filename(content_id, filename)
    return attachment.model_dump()


async def confluence_delete_attachment(
    ctx: Context,
    content_id: str,
    attachment_id: str
) -> Dict[str, Any]:
    """Delete an attachment.

    Args:
        ctx: MCP context with attachment operations
        content_id: Page or blog post ID
        attachment_id: Attachment ID

    Returns:
        Deletion confirmation
    """
    logger.info(f"Executing confluence_delete_attachment: content={content_id}, attachment={attachment_id}")
    try:
        _operations(ctx).delete(content_id, attachment_id)
    except Exception as e:
        logger.error(f"Failed to delete attachment {attachment_id}: {e}")
        raise
    return {"success": True, "content_id": content_id, "attachment_id": attachment_id}


async def confluence_upload_attachment(
    ctx: Context,
    content_id: str,
    file_path: str
) -> Dict[str, Any]:
    """Upload a local file as a new attachment.

    Args:
        ctx: MCP context with attachment operations
        content_id: Page or blog post ID
        file_path: Path of the local file to upload

    Returns:
        Created attachment data

    Raises:
        LocalIOError: If the file cannot be read
    """
    logger.info(f"Executing confluence_upload_attachment: content={content_id}, file={file_path}")
    attachment = _operations(ctx).create(content_id, file_path)
    return attachment.model_dump()


async def confluence_update_attachment(
    ctx: Context,
    content_id: str,
    attachment_id: str,
    file_path: str,
    minor_edit: bool = True
) -> Dict[str, Any]:
    """Upload a new version of an attachment's data.

    Args:
        ctx: MCP context with attachment operations
        content_id: Page or blog post ID
        attachment_id: Attachment ID without the 'att' prefix
        file_path: Path of the local file holding the new data
        minor_edit: Suppress watcher notifications (default: True)

    Returns:
        Updated attachment data
    """
    logger.info(
        f"Executing confluence_update_attachment: content={content_id}, "
        f"attachment={attachment_id}, file={file_path}, minor_edit={minor_edit}"
    )
    attachment = _operations(ctx).update(content_id, attachment_id, file_path, minor_edit=minor_edit)
    return attachment.model_dump()


async def confluence_sync_attachments(
    ctx: Context,
    content_id: str,
    file_paths: List[str]
) -> Dict[str, Any]:
    """Create or update attachments from local files, matched by file name.

    Processes files sequentially and continues past failures; every file
    gets exactly one entry in either results or errors.

    Args:
        ctx: MCP context with attachment operations
        content_id: Page or blog post ID
        file_paths: Paths of the local files to sync

    Returns:
        Batch results with structure:
        {
            "total": Number of files in batch,
            "succeeded": Number of files created or updated,
            "failed": Number of files that failed,
            "results": [{"index", "file_path", "action", "attachment"}],
            "errors": [{"index", "file_path", "error", "error_type"}]
        }
    """
    logger.info(f"Executing confluence_sync_attachments: content={content_id}, {len(file_paths)} files")
    result = add_update_attachments(_operations(ctx), content_id, file_paths)

    results = []
    errors = []
    for index, outcome in enumerate(result):
        if outcome.ok:
            results.append({
                "index": index,
                "file_path": outcome.file_path,
                "action": outcome.action,
                "attachment": outcome.attachment.model_dump()
            })
        else:
            errors.append({
                "index": index,
                "file_path": outcome.file_path,
                "error": str(outcome.error),
                "error_type": type(outcome.error).__name__
            })

    return {
        "total": len(result),
        "succeeded": len(results),
        "failed": len(errors),
        "results": results,
        "errors": errors
    }
