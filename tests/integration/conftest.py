"""Integration test fixtures - let real Confluence settings through."""
import pytest


@pytest.fixture(autouse=True)
def reset_environment_for_tests():
    """Override the root conftest's environment reset.

    Integration tests read the real CONFLUENCE_URL, CONFLUENCE_USERNAME,
    CONFLUENCE_API_TOKEN, CONFLUENCE_PERSONAL_TOKEN, CONFLUENCE_VERIFY_SSL
    and CONFLUENCE_TEST_CONTENT_ID instead of the mock values.
    """
    pass
