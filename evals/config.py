"""Configuration for the Document Engine MCP tool usage evaluation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """LLM provider for the agent under test."""

    OPENAI = "openai"
    VLLM = "vllm"
    AZURE = "azure"
    ANTHROPIC = "anthropic"
    ANTHROPIC_VERTEX = "anthropic-vertex"
    GOOGLE_GENAI = "google-genai"
    GOOGLE_VERTEX = "google-vertex"


class EvalConfig(BaseSettings):
    """Configuration for tool usage evaluation runs.

    Loaded from environment variables with DOCENGINE_EVAL_ prefix
    or from a .env.eval file. The model under test is set per run by
    the orchestrator; llm_model and llm_temperature are its defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCENGINE_EVAL_",
        env_file=".env.eval",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Agent LLM settings
    llm_provider: LLMProvider = Field(
        default=LLMProvider.OPENAI,
        description="LLM provider for the agent",
    )
    llm_model: str = Field(
        default="gpt-4o",
        description="Model name for the agent LLM",
    )
    llm_temperature: float | None = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature; None leaves the provider default",
    )
    llm_api_key: str = Field(
        default="",
        description="API key for the agent LLM",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Base URL for vLLM or Azure endpoint",
    )

    # Vertex AI settings (for anthropic-vertex and google-vertex providers)
    vertex_project_id: str | None = Field(
        default=None,
        description="Google Cloud project ID for Vertex AI",
    )
    vertex_location: str = Field(
        default="us-central1",
        description="Google Cloud region for Vertex AI",
    )

    # Agent loop settings
    max_agent_turns: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Maximum LLM turns per scenario",
    )

    # Files
    assets_dir: Path = Field(
        default=Path("evals/assets"),
        description="Directory holding the fixture PDFs",
    )
    results_dir: Path = Field(
        default=Path("evals/results"),
        description="Directory the JSON results are written to",
    )
