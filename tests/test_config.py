"""Tests for server configuration."""

import pytest
from pydantic import ValidationError

from docengine_mcp.config import DocEngineConfig, LogLevel, TransportMode


class TestDocEngineConfig:
    """Tests for DocEngineConfig."""

    def test_defaults(self) -> None:
        """Defaults point at a local Document Engine."""
        config = DocEngineConfig()

        assert config.base_url == "http://localhost:5000"
        assert config.api_auth_token == "secret"
        assert config.max_retries == 3
        assert config.retry_delay == 1000
        assert config.transport == TransportMode.STDIO
        assert config.timeout_seconds == 30.0

    def test_reads_document_engine_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Standard Document Engine variables are honoured."""
        monkeypatch.setenv("DOCUMENT_ENGINE_BASE_URL", "https://docs.example.com/")
        monkeypatch.setenv("DOCUMENT_ENGINE_API_AUTH_TOKEN", "token-123")
        monkeypatch.setenv("MAX_RETRIES", "5")
        monkeypatch.setenv("CONNECTION_TIMEOUT", "5000")

        config = DocEngineConfig()

        assert config.base_url == "https://docs.example.com"
        assert config.api_auth_token == "token-123"
        assert config.max_retries == 5
        assert config.timeout_seconds == 5.0

    def test_rejects_non_http_base_url(self) -> None:
        """The base URL must be an http(s) URL."""
        with pytest.raises(ValidationError, match="must be a valid URL"):
            DocEngineConfig(base_url="ftp://docs.example.com")

    def test_rejects_empty_token(self) -> None:
        """An empty API token is invalid."""
        with pytest.raises(ValidationError):
            DocEngineConfig(api_auth_token="")

    def test_rejects_negative_retries(self) -> None:
        """Retry counts cannot be negative."""
        with pytest.raises(ValidationError):
            DocEngineConfig(max_retries=-1)

    def test_log_level_is_case_insensitive(self) -> None:
        """Lowercase log levels are accepted."""
        assert DocEngineConfig(log_level="debug").log_level == LogLevel.DEBUG
