"""Confluence Connection Configuration

Connection settings and credentials, loaded from environment variables:
- CONFLUENCE_URL: REST API root (e.g. https://example.atlassian.net/wiki/rest/api)
- CONFLUENCE_PERSONAL_TOKEN: Personal access token (bearer auth, preferred)
- CONFLUENCE_USERNAME / CONFLUENCE_API_TOKEN: Basic auth credentials
- CONFLUENCE_VERIFY_SSL: Verify SSL certificates (default: true)
- CONFLUENCE_TIMEOUT: Request timeout in seconds (default: 30)
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class CredentialsError(Exception):
    """Raised when Confluence connection settings are missing or incomplete."""

    pass


class ConfluenceConfig(BaseModel):
    """Connection settings passed explicitly to the transport and operations."""

    base_url: str = Field(description="REST API root URL")
    username: Optional[str] = Field(default=None, description="Basic auth user (email)")
    api_token: Optional[str] = Field(default=None, description="Basic auth API token")
    personal_token: Optional[str] = Field(default=None, description="Bearer personal access token")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(default=2, ge=1, description="Total attempts on network failure")
    retry_wait: float = Field(default=2.0, ge=0, description="Seconds between attempts")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip trailing slashes; endpoints append their own."""
        if not v or not v.strip():
            raise ValueError("Base URL cannot be empty")
        return v.strip().rstrip("/")

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "ConfluenceConfig":
        """Load configuration from CONFLUENCE_* environment variables.

        Raises:
            CredentialsError: If the URL or credentials are missing
        """
        base_url = os.environ.get("CONFLUENCE_URL")
        if not base_url:
            logger.error("CONFLUENCE_URL environment variable not set.")
            raise CredentialsError("CONFLUENCE_URL environment variable is required.")

        personal_token = os.environ.get("CONFLUENCE_PERSONAL_TOKEN") or None
        username = os.environ.get("CONFLUENCE_USERNAME") or None
        api_token = os.environ.get("CONFLUENCE_API_TOKEN") or None

        if not personal_token and not (username and api_token):
            logger.error("No Confluence credentials found in environment.")
            raise CredentialsError(
                "Set CONFLUENCE_PERSONAL_TOKEN, or both CONFLUENCE_USERNAME and CONFLUENCE_API_TOKEN."
            )

        verify_ssl = os.environ.get("CONFLUENCE_VERIFY_SSL", "true").lower() in ("true", "1", "yes")
        timeout = float(os.environ.get("CONFLUENCE_TIMEOUT", "30"))
        logger.info(f"SSL verification {'enabled' if verify_ssl else 'disabled'}")

        return cls(
            base_url=base_url,
            username=username,
            api_token=api_token,
            personal_token=personal_token,
            verify_ssl=verify_ssl,
            timeout=timeout,
        )
