"""Shared pytest configuration and fixtures for Rotation Proxy tests."""

import pytest

from rotation_proxy.core.providers import SUPPORTED_PROVIDERS

# Import HTTP mocking fixtures from fixtures module
pytest_plugins = ["tests.fixtures.mock_http"]

CONFIG_ENV_VARS = (
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "ENVIRONMENT",
    "REQUEST_TIMEOUT",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TOP_P",
    "SITE_URL",
    "SITE_NAME",
    "GOOGLE_API_KEY",
    "HF_TOKEN",
    *(f"{p.value.upper()}_API_KEY" for p in SUPPORTED_PROVIDERS),
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires services)"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "tests/unit/" in str(item.fspath) or "tests/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Start every test from defaults.

    Values from a developer's shell or .env file would otherwise leak into
    configuration tests. Real keys are never needed: RESPX mocks all HTTP.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def provider_keys(monkeypatch):
    """Configure test keys for a few providers."""
    monkeypatch.setenv("OPENROUTER_API_KEY", "or-test-1,or-test-2")
    monkeypatch.setenv("GEMINI_API_KEY", "gm-test-1")
    monkeypatch.setenv("MISTRAL_API_KEY", "ms-test-1 ms-test-2 ms-test-3")
