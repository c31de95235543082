"""
Settings and client construction tests.
"""

from __future__ import annotations

import pytest

from taskboard_mcp.api import RestDataStore
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.exceptions import TaskBoardConfigurationError
from taskboard_mcp.settings import TaskBoardSettings, get_settings


pytestmark = [pytest.mark.unit]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("URL", "KEY", "TIMEOUT", "DEBOUNCE_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(f"TASKBOARD_SUPABASE_{name}", raising=False)
        monkeypatch.delenv(f"TASKBOARD_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self):
        settings = TaskBoardSettings(_env_file=None)

        assert settings.supabase_url is None
        assert settings.debounce_seconds == 1.5
        assert settings.timeout == 30.0
        assert settings.log_level == "INFO"
        assert not settings.is_configured

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TASKBOARD_SUPABASE_URL", "https://demo.supabase.co/")
        monkeypatch.setenv("TASKBOARD_SUPABASE_KEY", "secret")
        monkeypatch.setenv("TASKBOARD_DEBOUNCE_SECONDS", "0.5")
        monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "debug")

        settings = TaskBoardSettings(_env_file=None)

        assert settings.supabase_url == "https://demo.supabase.co"
        assert settings.supabase_key.get_secret_value() == "secret"
        assert "secret" not in repr(settings)
        assert settings.debounce_seconds == 0.5
        assert settings.log_level == "DEBUG"
        assert settings.is_configured

    def test_negative_debounce_rejected(self):
        with pytest.raises(ValueError):
            TaskBoardSettings(_env_file=None, debounce_seconds=-1)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestClientFromSettings:

    def test_missing_configuration(self):
        with pytest.raises(TaskBoardConfigurationError):
            TaskBoardClient.from_settings(TaskBoardSettings(_env_file=None))

    async def test_builds_rest_store(self):
        settings = TaskBoardSettings(
            _env_file=None,
            supabase_url="https://demo.supabase.co",
            supabase_key="secret",
        )

        client = TaskBoardClient.from_settings(settings)

        assert isinstance(client.store, RestDataStore)
        assert client.store.base_url == "https://demo.supabase.co/rest/v1"
        await client.disconnect()
