"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables and that the
grouped configuration properties expose them.
"""

import pytest

from meridian.server.core.config import (
    ApiTokenConfig,
    CORSConfig,
    GoogleConfig,
    ImportConfig,
    Settings,
)

MERIDIAN_ENV_VARS = [
    "MERIDIAN_SERVER_HOST",
    "MERIDIAN_SERVER_PORT",
    "MERIDIAN_LOG_LEVEL",
    "DATABASE_URL",
    "GOOGLE_API_KEY",
    "MERIDIAN_MINUTES_MODEL",
    "MERIDIAN_MINUTES_LONG_MODEL",
    "MERIDIAN_LONG_TRANSCRIPT_THRESHOLD",
    "MERIDIAN_EMAIL_MODEL",
    "MERIDIAN_API_TOKEN_PREFIX",
    "MERIDIAN_ISSUES_API_DEFAULT_LIMIT",
    "MERIDIAN_ISSUES_API_MAX_LIMIT",
    "MERIDIAN_IMPORT_BATCH_SIZE",
    "MERIDIAN_MAX_TRANSCRIPT_BYTES",
    "CORS_ORIGINS",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every Meridian variable so defaults are visible."""
    for name in MERIDIAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _settings() -> Settings:
    return Settings(_env_file=None)


class TestSettingsDefaults:
    """Test Settings defaults without any environment."""

    def test_server_defaults(self, clean_env):
        settings = _settings()

        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 8000
        assert settings.log_level == "INFO"
        assert settings.database_url == "sqlite+aiosqlite:///./meridian.db"

    def test_grouped_defaults(self, clean_env):
        settings = _settings()

        assert settings.google.api_key is None
        assert settings.google.long_transcript_threshold == 8000
        assert settings.api_tokens.prefix == "mrd_"
        assert (settings.api_tokens.default_limit, settings.api_tokens.max_limit) == (50, 100)
        assert settings.imports.batch_size == 50
        assert settings.cors.origins == ["*"]


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_binding(self, clean_env):
        clean_env.setenv("MERIDIAN_SERVER_HOST", "127.0.0.1")
        clean_env.setenv("MERIDIAN_SERVER_PORT", "9000")
        clean_env.setenv("MERIDIAN_LOG_LEVEL", "DEBUG")

        settings = _settings()

        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 9000
        assert settings.log_level == "DEBUG"

    def test_database_url_binding(self, clean_env):
        clean_env.setenv("DATABASE_URL", "postgresql+asyncpg://meridian:pw@db:5432/meridian")
        assert _settings().database_url == "postgresql+asyncpg://meridian:pw@db:5432/meridian"

    def test_google_binding(self, clean_env):
        clean_env.setenv("GOOGLE_API_KEY", "test-key")
        clean_env.setenv("MERIDIAN_MINUTES_MODEL", "gemini-fast")
        clean_env.setenv("MERIDIAN_LONG_TRANSCRIPT_THRESHOLD", "12000")

        google = _settings().google

        assert isinstance(google, GoogleConfig)
        assert google.api_key == "test-key"
        assert google.minutes_model == "gemini-fast"
        assert google.long_transcript_threshold == 12000

    def test_api_token_binding(self, clean_env):
        clean_env.setenv("MERIDIAN_API_TOKEN_PREFIX", "tst_")
        clean_env.setenv("MERIDIAN_ISSUES_API_MAX_LIMIT", "25")

        tokens = _settings().api_tokens

        assert isinstance(tokens, ApiTokenConfig)
        assert tokens.prefix == "tst_"
        assert tokens.max_limit == 25

    def test_import_binding(self, clean_env):
        clean_env.setenv("MERIDIAN_IMPORT_BATCH_SIZE", "10")
        clean_env.setenv("MERIDIAN_MAX_TRANSCRIPT_BYTES", "2048")

        imports = _settings().imports

        assert isinstance(imports, ImportConfig)
        assert (imports.batch_size, imports.max_transcript_bytes) == (10, 2048)

    def test_cors_origins_binding(self, clean_env):
        clean_env.setenv("CORS_ORIGINS", '["https://tracker.example.com"]')

        cors = _settings().cors

        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["https://tracker.example.com"]
        assert cors.allow_credentials is True


class TestGroupedConfigModels:
    """Test the grouped configuration models directly."""

    def test_populate_by_field_name(self):
        config = GoogleConfig(api_key="k", minutes_model="m")
        assert (config.api_key, config.minutes_model) == ("k", "m")

    def test_populate_by_alias(self):
        config = ApiTokenConfig(MERIDIAN_API_TOKEN_PREFIX="abc_")
        assert config.prefix == "abc_"
