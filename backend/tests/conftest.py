"""Shared test configuration and fixtures."""

import pytest

from api.dependencies import get_resume_store


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


@pytest.fixture
def resume_store():
    """The process-wide resume store, emptied around each test."""
    store = get_resume_store()
    store.clear()
    yield store
    store.clear()
