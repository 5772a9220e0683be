"""Root conftest for all tests - shared fixtures."""
import sys
from pathlib import Path

# Add src directory to path
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

import pytest
from unittest.mock import Mock, MagicMock

from confluence_mcp_server.attachments import AttachmentOperations
from confluence_mcp_server.client import ConfluenceTransport
from confluence_mcp_server.config import ConfluenceConfig
from fixtures import confluence_responses

BASE_URL = "https://confluence.test.example.com/wiki/rest/api"


@pytest.fixture
def base_url():
    """REST API root used by all unit tests."""
    return BASE_URL


@pytest.fixture
def mock_transport():
    """Mock transport returning an empty result list by default."""
    transport = Mock(spec=ConfluenceTransport)
    transport.send.return_value = confluence_responses.as_body(confluence_responses.MOCK_EMPTY_LIST)
    return transport


@pytest.fixture
def operations(mock_transport):
    """Attachment operations bound to the mock transport."""
    return AttachmentOperations(BASE_URL, mock_transport)


@pytest.fixture
def test_config():
    """Configuration with retries that do not sleep."""
    return ConfluenceConfig(
        base_url=BASE_URL,
        username="test_user@example.com",
        api_token="test_api_token",
        retry_wait=0
    )


@pytest.fixture
def mock_attachment():
    """Mock attachment data."""
    return confluence_responses.MOCK_ATTACHMENT_1.copy()


@pytest.fixture
def upload_files(tmp_path):
    """Three small local files to upload."""
    paths = []
    for name, data in [("a.png", b"\x89PNG fake"), ("b.pdf", b"%PDF-1.4 fake"), ("c.txt", b"hello")]:
        path = tmp_path / name
        path.write_bytes(data)
        paths.append(str(path))
    return paths


@pytest.fixture(autouse=True)
def reset_environment_for_tests(monkeypatch):
    """Reset environment variables for each test.

    This fixture automatically runs before each test to ensure
    a clean environment state.
    """
    monkeypatch.setenv("CONFLUENCE_MOCK_MODE", "true")
    monkeypatch.setenv("CONFLUENCE_URL", BASE_URL)
    monkeypatch.setenv("CONFLUENCE_USERNAME", "test_user@example.com")
    monkeypatch.setenv("CONFLUENCE_API_TOKEN", "test_api_token")
    monkeypatch.delenv("CONFLUENCE_PERSONAL_TOKEN", raising=False)
    monkeypatch.delenv("CONFLUENCE_VERIFY_SSL", raising=False)
    monkeypatch.delenv("CONFLUENCE_TIMEOUT", raising=False)


@pytest.fixture
def mcp_context(operations):
    """Mock MCP context with attachment operations."""
    context = MagicMock()
    context.request_context.lifespan_context = {"attachments": operations}
    return context
