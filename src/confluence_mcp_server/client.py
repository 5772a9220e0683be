"""Confluence HTTP Transport

The narrow request/response interface attachment operations call through,
and its requests-based implementation with:
- Basic (username + API token) or bearer (personal access token) auth
- Retry of network failures (timeouts, refused connections)
- Standardized HTTP error handling
"""

import logging
from typing import Optional, Protocol

import requests
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_exception_type, RetryError

from .config import ConfluenceConfig
from .utils.errors import TransportError, handle_http_error

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Single request/response HTTP exchange."""

    def send(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        content_type: Optional[str] = None
    ) -> bytes:
        """Send one request and return the raw response body.

        Raises:
            TransportError: On network failure or non-2xx status
        """
        ...


class ConfluenceTransport:
    """Authenticated Confluence transport over a requests session."""

    def __init__(self, config: ConfluenceConfig):
        """Initialize transport.

        Args:
            config: Connection settings and credentials
        """
        self.config = config
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            # Confluence rejects multipart uploads without this header (XSRF check)
            "X-Atlassian-Token": "no-check",
        })

        if config.personal_token:
            self.session.headers["Authorization"] = f"Bearer {config.personal_token}"
            auth_mode = "bearer token"
        else:
            self.session.auth = (config.username, config.api_token)
            auth_mode = "basic auth"

        logger.info(
            f"Initialized Confluence transport for {config.base_url} "
            f"({auth_mode}, SSL verify: {config.verify_ssl})"
        )

    def _request_with_retry(self, method: str, url: str, **kwargs) -> requests.Response:
        @retry(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_fixed(self.config.retry_wait),
            retry=retry_if_exception_type((requests.exceptions.Timeout,
                                           requests.exceptions.ConnectionError))
        )
        def request():
            return self.session.request(method, url, **kwargs)

        return request()

    def send(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        content_type: Optional[str] = None
    ) -> bytes:
        """Send one request and return the raw response body.

        Args:
            method: HTTP method (GET, POST, DELETE)
            url: Fully built endpoint URL
            body: Request body, None for GET/DELETE
            content_type: Content-Type header for the body

        Returns:
            Response body bytes (empty when the service sends none)

        Raises:
            TransportError: On network failure or non-2xx status
        """
        headers = {"Content-Type": content_type} if content_type else None
        logger.debug(f"{method} {url} (body: {len(body) if body else 0} bytes)")

        try:
            response = self._request_with_retry(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error(f"Network error on {method} {url} after {self.config.max_retries} attempts: {cause}")
            raise TransportError(
                f"Network error: {cause}",
                details={"method": method, "url": url}
            ) from cause
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed on {method} {url}: {e}")
            raise TransportError(
                f"Request failed: {e}",
                details={"method": method, "url": url}
            ) from e

        if not response.ok:
            logger.error(f"{method} {url} returned HTTP {response.status_code}")
            raise handle_http_error(response.status_code, response.text)

        return response.content or b""

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
