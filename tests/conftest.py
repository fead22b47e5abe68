"""Shared test fixtures and configuration."""
import pytest
from typing import Any

from tests.fixtures import travis_webhooks


@pytest.fixture
def mock_settings() -> dict[str, Any]:
    """Mock settings for testing."""
    return {
        "GITHUB_TOKEN": "test_token_123",
        "GITHUB_API_URL": "https://api.github.com",
        "GITHUB_TIMEOUT": "5",
        "COMMENTS_PER_PAGE": "100",
        "COMMENTS_MAX_PAGES": "50",
        "LOG_LEVEL": "INFO",
    }


@pytest.fixture
def sample_travis_payload() -> dict[str, Any]:
    """Sample Travis webhook payload for a failed pull request build."""
    return travis_webhooks.failed_pull_request_build()
