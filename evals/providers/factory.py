"""Factory for agent providers.

Dispatches on LLMProvider enum values to instantiate the SDK-specific
provider implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from evals.config import LLMProvider

if TYPE_CHECKING:
    from evals.config import EvalConfig
    from evals.providers.base import AgentLLMProvider


def create_agent_provider(config: EvalConfig) -> AgentLLMProvider:
    """Create an agent LLM provider based on the configured provider type.

    Args:
        config: Evaluation configuration; llm_model and llm_temperature
            select the model under test.

    Returns:
        An AgentLLMProvider instance for the configured provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    provider = config.llm_provider

    if provider in (LLMProvider.OPENAI, LLMProvider.VLLM, LLMProvider.AZURE):
        from evals.providers.openai_provider import OpenAIAgentProvider

        return OpenAIAgentProvider(config)

    if provider in (LLMProvider.ANTHROPIC, LLMProvider.ANTHROPIC_VERTEX):
        from evals.providers.anthropic_provider import AnthropicAgentProvider

        return AnthropicAgentProvider(config)

    if provider in (LLMProvider.GOOGLE_GENAI, LLMProvider.GOOGLE_VERTEX):
        from evals.providers.google_provider import GoogleAgentProvider

        return GoogleAgentProvider(config)

    raise ValueError(f"Unsupported agent LLM provider: {provider}")
