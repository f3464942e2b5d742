"""Completion provider implementations for Shell AI."""

from ..config import LLMProvider, ShellAIConfig
from .anthropic_provider import AnthropicProvider
from .base import CompletionProvider, ProviderError
from .google_provider import GoogleProvider
from .openai_provider import OpenAIProvider
from .openrouter_provider import OpenRouterProvider

__all__ = [
    "CompletionProvider",
    "ProviderError",
    "OpenRouterProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "GoogleProvider",
    "get_provider",
]


def get_provider(config: ShellAIConfig) -> CompletionProvider:
    """Get the completion provider selected by the configuration."""
    if config.llm_provider == LLMProvider.OPENROUTER:
        return OpenRouterProvider(config)
    elif config.llm_provider == LLMProvider.OPENAI:
        return OpenAIProvider(config)
    elif config.llm_provider == LLMProvider.ANTHROPIC:
        return AnthropicProvider(config)
    elif config.llm_provider == LLMProvider.GOOGLE:
        return GoogleProvider(config)
    else:
        raise ValueError(f"Unknown provider: {config.llm_provider}")
