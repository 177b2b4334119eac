"""Shared fixtures for reporter tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from reporter.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import reporter.services.http_client as http_mod

    http_mod._client = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from reporter.config import Settings, get_settings

    test_settings = Settings(
        ai_gateway_url="https://gateway.test/v1",
        ai_gateway_api_key="test-key",
        ai_model="test/model",
        ai_gateway_timeout=30.0,
        submit_max_attempts=3,
        submit_backoff_seconds=1.0,
        submit_retry_policy="always",
        reporter_api_url="http://reporter.test",
        client_timeout=35.0,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("reporter.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from reporter.config import get_settings creates a local binding that
    # the reporter.config monkeypatch above does not affect)
    for mod_path in [
        "reporter.services.llm",
        "reporter.services.http_client",
        "reporter.services.report_client",
        "reporter.services.submission",
        "reporter.main",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def no_sleep(mocker):
    """Skip backoff delays; returns the mock so delays can be asserted."""
    from unittest.mock import AsyncMock

    return mocker.patch(
        "reporter.services.submission.asyncio.sleep", new_callable=AsyncMock
    )
