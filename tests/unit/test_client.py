"""Unit tests for the requests-based Confluence transport."""
import pytest
import requests
from unittest.mock import Mock, patch

from confluence_mcp_server.client import ConfluenceTransport
from confluence_mcp_server.config import ConfluenceConfig
from confluence_mcp_server.utils.errors import (
    AuthenticationError,
    ServerError,
    TransportError,
)

URL = "https://confluence.test.example.com/wiki/rest/api/content/123/child/attachment"


def _response(status_code=200, content=b"", text=""):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.content = content
    response.text = text
    return response


def test_basic_auth_session(test_config):
    """Test that username + API token configure basic auth."""
    transport = ConfluenceTransport(test_config)

    assert transport.session.auth == ("test_user@example.com", "test_api_token")
    assert "Authorization" not in transport.session.headers
    assert transport.session.headers["X-Atlassian-Token"] == "no-check"


def test_bearer_token_takes_precedence(test_config):
    """Test that a personal access token is sent as a bearer token."""
    config = test_config.model_copy(update={"personal_token": "pat-123"})
    transport = ConfluenceTransport(config)

    assert transport.session.headers["Authorization"] == "Bearer pat-123"
    assert transport.session.auth is None


def test_send_get(test_config):
    """Test a GET returning a JSON body."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "request", return_value=_response(content=b'{"results": []}')) as mock_request:
        body = transport.send("GET", URL)

    assert body == b'{"results": []}'
    mock_request.assert_called_once_with(
        "GET", URL, data=None, headers=None, timeout=30.0, verify=True
    )


def test_send_multipart_sets_content_type(test_config):
    """Test that the given content type is sent with the body."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "request", return_value=_response(content=b"{}")) as mock_request:
        transport.send("POST", URL, b"--x--", "multipart/form-data; boundary=x")

    kwargs = mock_request.call_args.kwargs
    assert kwargs["data"] == b"--x--"
    assert kwargs["headers"] == {"Content-Type": "multipart/form-data; boundary=x"}


def test_send_empty_body(test_config):
    """Test that DELETE with no response body returns empty bytes."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "request", return_value=_response(status_code=204, content=None)):
        assert transport.send("DELETE", URL + "/456") == b""


@pytest.mark.parametrize("status_code,error_class", [
    (401, AuthenticationError),
    (404, TransportError),
    (503, ServerError),
])
def test_http_error_status(test_config, status_code, error_class):
    """Test that non-2xx statuses raise TransportError subclasses without retry."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "request", return_value=_response(status_code, text="nope")) as mock_request:
        with pytest.raises(error_class) as exc_info:
            transport.send("GET", URL)

    assert type(exc_info.value) is error_class
    assert exc_info.value.status_code == status_code
    assert mock_request.call_count == 1


def test_connection_error_is_retried(test_config):
    """Test that a network failure is retried once before succeeding."""
    transport = ConfluenceTransport(test_config)
    side_effect = [requests.exceptions.ConnectionError("refused"), _response(content=b"{}")]
    with patch.object(transport.session, "request", side_effect=side_effect) as mock_request:
        assert transport.send("GET", URL) == b"{}"

    assert mock_request.call_count == 2


def test_timeout_exhausts_retries(test_config):
    """Test that persistent timeouts surface as TransportError."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "request", side_effect=requests.exceptions.Timeout("slow")) as mock_request:
        with pytest.raises(TransportError, match="Network error"):
            transport.send("GET", URL)

    assert mock_request.call_count == test_config.max_retries


def test_other_request_errors_not_retried(test_config):
    """Test that non-network request errors fail immediately."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "request", side_effect=requests.exceptions.InvalidURL("bad")) as mock_request:
        with pytest.raises(TransportError, match="Request failed"):
            transport.send("GET", URL)

    assert mock_request.call_count == 1


def test_close(test_config):
    """Test that close closes the session."""
    transport = ConfluenceTransport(test_config)
    with patch.object(transport.session, "close") as mock_close:
        transport.close()
    mock_close.assert_called_once()
