"""Confluence MCP Server Data Models

This package contains Pydantic models for Confluence entities.
"""

__all__ = [
    "attachment",
]
