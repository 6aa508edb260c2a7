"""LLM providers the evaluated agent can run on."""

from evals.providers.factory import create_agent_provider

__all__ = ["create_agent_provider"]
