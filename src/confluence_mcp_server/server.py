from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
import logging

from mcp.server.fastmcp import FastMCP, Context

from .attachments import AttachmentOperations
from .client import ConfluenceTransport
from .config import ConfluenceConfig, CredentialsError
from .tools import attachment_tools

# Configure basic logging FIRST
logging.basicConfig(level=logging.INFO, format='%(asctime)s - SERVER - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def confluence_lifespan(server: FastMCP) -> AsyncIterator[dict]:
    """
    Manages the Confluence transport lifecycle: loads configuration from the
    environment, opens the transport and binds attachment operations to it.
    """
    transport = None
    try:
        config = ConfluenceConfig.from_env()
        transport = ConfluenceTransport(config)
        attachments = AttachmentOperations(config.base_url, transport)
        logger.info(f"Attachment operations ready for {config.base_url}")

        yield {"attachments": attachments}

    except CredentialsError as e:
        logger.error(f"Failed to obtain Confluence configuration: {e}")
        raise  # Prevent server start
    finally:
        if transport is not None:
            transport.close()
        logger.info("Confluence lifespan context manager exiting.")


mcp = FastMCP(
    "Confluence Attachments Server",
    lifespan=confluence_lifespan,
)

# --- Tool Implementations ---

@mcp.tool()
async def confluence_get_attachment(content_id: str, attachment_id: str, ctx: Context) -> dict:
    """Get a single attachment of a Confluence page by ID.

    Args:
        content_id: Page or blog post ID
        attachment_id: Attachment ID (e.g. att123456)
        ctx: MCP context

    Returns:
        Attachment data
    """
    return await attachment_tools.confluence_get_attachment(ctx, content_id, attachment_id)


@mcp.tool()
async def confluence_get_attachment_by_filename(content_id: str, filename: str, ctx: Context) -> dict:
    """Get the attachment of a Confluence page with the given file name.

    Args:
        content_id: Page or blog post ID
        filename: Attachment file name
        ctx: MCP context

    Returns:
        Attachment data
    """
    return await attachment_tools.confluence_get_attachment_by_filename(ctx, content_id, filename)


@mcp.tool()
async def confluence_delete_attachment(content_id: str, attachment_id: str, ctx: Context) -> dict:
    """Delete an attachment from a Confluence page.

    Args:
        content_id: Page or blog post ID
        attachment_id: Attachment ID
        ctx: MCP context

    Returns:
        Deletion confirmation
    """
    return await attachment_tools.confluence_delete_attachment(ctx, content_id, attachment_id)


@mcp.tool()
async def confluence_upload_attachment(content_id: str, file_path: str, ctx: Context) -> dict:
    """Upload a local file as a new attachment.

    Args:
        content_id: Page or blog post ID
        file_path: Local file path
        ctx: MCP context

    Returns:
        Created attachment data
    """
    return await attachment_tools.confluence_upload_attachment(ctx, content_id, file_path)


@mcp.tool()
async def confluence_update_attachment(
    content_id: str,
    attachment_id: str,
    file_path: str,
    ctx: Context,
    minor_edit: bool = True
) -> dict:
    """Upload a new version of an existing attachment.

    Args:
        content_id: Page or blog post ID
        attachment_id: Attachment ID without the 'att' prefix
        file_path: Local file path
        ctx: MCP context
        minor_edit: Suppress watcher notifications (default: True)

    Returns:
        Updated attachment data
    """
    return await attachment_tools.confluence_update_attachment(
        ctx, content_id, attachment_id, file_path, minor_edit
    )


@mcp.tool()
async def confluence_sync_attachments(content_id: str, file_paths: list[str], ctx: Context) -> dict:
    """Create or update attachments from local files, matched by file name.

    Args:
        content_id: Page or blog post ID
        file_paths: Local file paths
        ctx: MCP context

    Returns:
        Batch results with per-file successes and errors
    """
    return await attachment_tools.confluence_sync_attachments(ctx, content_id, file_paths)


def main():
    """Entry point for the confluence-mcp-server script."""
    logger.info("Starting Confluence MCP server...")
    mcp.run()

if __name__ == "__main__":
    # This allows running the server directly with `python -m confluence_mcp_server.server`
    main()
