"""Anthropic provider implementation for Shell AI."""

import anthropic
from anthropic import AsyncAnthropic

from ..config import ShellAIConfig
from .base import CompletionProvider, ProviderError


class AnthropicProvider(CompletionProvider):
    """Anthropic provider implementation using Claude models."""

    def __init__(self, config: ShellAIConfig):
        super().__init__(config)
        self.client = AsyncAnthropic(api_key=config.anthropic_api_key)
        self.model = config.anthropic_model

    async def complete(self, system_message: str, user_message: str) -> str:
        """Generate a completion using the Anthropic API."""
        try:
            response = await self.client.messages.create(
                model=self.model,
                system=system_message,
                messages=[{"role": "user", "content": user_message}],
                max_tokens=1024,
                temperature=self.config.temperature,
            )
        except anthropic.RateLimitError as e:
            raise ProviderError("Rate limit exceeded. Please try again in a moment.") from e
        except anthropic.AuthenticationError as e:
            raise ProviderError(
                "Authentication failed. Please check your Anthropic API key."
            ) from e
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic API error: {str(e)}") from e

        content = "".join(
            block.text for block in response.content if block.type == "text"
        )
        if not content:
            raise ProviderError("Invalid response format")
        return content

    def get_model_name(self) -> str:
        """Get the current model name."""
        return self.model
