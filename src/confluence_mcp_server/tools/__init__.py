"""Confluence MCP Server Tools

This package contains the MCP tool implementations for Confluence attachments.
"""

__all__ = [
    "attachment_tools",
]
