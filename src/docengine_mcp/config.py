"""Configuration management for the Document Engine MCP server."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportMode(str, Enum):
    """MCP transport mode."""

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DocEngineConfig(BaseSettings):
    """Configuration for the Document Engine MCP server.

    Values are read from the same environment variables the Document Engine
    tooling uses (DOCUMENT_ENGINE_BASE_URL, MAX_RETRIES, ...) or from a .env
    file. Durations are in milliseconds.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Document Engine connection
    base_url: str = Field(
        default="http://localhost:5000",
        validation_alias=AliasChoices("base_url", "DOCUMENT_ENGINE_BASE_URL"),
        description="Document Engine base URL",
    )
    api_auth_token: str = Field(
        default="secret",
        min_length=1,
        validation_alias=AliasChoices("api_auth_token", "DOCUMENT_ENGINE_API_AUTH_TOKEN"),
        description="Document Engine API auth token",
    )
    connection_timeout: int = Field(
        default=30000,
        gt=0,
        validation_alias=AliasChoices("connection_timeout", "CONNECTION_TIMEOUT"),
        description="Request timeout in milliseconds",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        validation_alias=AliasChoices("max_retries", "MAX_RETRIES"),
        description="Retries for transient API failures",
    )
    retry_delay: int = Field(
        default=1000,
        ge=0,
        validation_alias=AliasChoices("retry_delay", "RETRY_DELAY"),
        description="Base retry delay in milliseconds",
    )
    max_connections: int = Field(
        default=100,
        gt=0,
        validation_alias=AliasChoices("max_connections", "MAX_CONNECTIONS"),
        description="Maximum pooled HTTP connections",
    )

    # Startup readiness polling
    poll_max_retries: int = Field(
        default=30,
        ge=1,
        validation_alias=AliasChoices("poll_max_retries", "DOCUMENT_ENGINE_POLL_MAX_RETRIES"),
        description="Health check attempts while waiting for Document Engine at startup",
    )
    poll_retry_delay: int = Field(
        default=2000,
        ge=100,
        validation_alias=AliasChoices("poll_retry_delay", "DOCUMENT_ENGINE_POLL_RETRY_DELAY"),
        description="Delay between startup health checks in milliseconds",
    )

    # Server settings
    transport: TransportMode = Field(
        default=TransportMode.STDIO,
        validation_alias=AliasChoices("transport", "MCP_TRANSPORT"),
        description="MCP transport mode",
    )
    host: str = Field(
        default="localhost",
        validation_alias=AliasChoices("host", "MCP_HOST"),
        description="Host to bind HTTP server to",
    )
    port: int = Field(
        default=5100,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "PORT"),
        description="Port to bind HTTP server to",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
        description="Logging level",
    )

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("DOCUMENT_ENGINE_BASE_URL must be a valid URL")
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def timeout_seconds(self) -> float:
        """Request timeout in seconds, as httpx expects it."""
        return self.connection_timeout / 1000


@lru_cache
def get_config() -> DocEngineConfig:
    """Get the cached server configuration."""
    return DocEngineConfig()
