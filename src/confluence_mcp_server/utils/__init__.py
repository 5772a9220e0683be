"""Confluence MCP Server Utilities

This package contains utility modules for the Confluence MCP server.
"""

__all__ = [
    "codec",
    "endpoints",
    "errors",
]
