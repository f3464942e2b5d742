"""OpenAI provider implementation for Shell AI."""

import openai
from openai import AsyncOpenAI

from ..config import ShellAIConfig
from .base import CompletionProvider, ProviderError


class OpenAIProvider(CompletionProvider):
    """OpenAI provider implementation using GPT models."""

    def __init__(self, config: ShellAIConfig):
        super().__init__(config)
        self.client = AsyncOpenAI(api_key=config.openai_api_key)
        self.model = config.openai_model

    async def complete(self, system_message: str, user_message: str) -> str:
        """Generate a completion using the OpenAI API."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self._build_messages(system_message, user_message),
                temperature=self.config.temperature,
            )
        except openai.RateLimitError as e:
            raise ProviderError("Rate limit exceeded. Please try again in a moment.") from e
        except openai.AuthenticationError as e:
            raise ProviderError(
                "Authentication failed. Please check your OpenAI API key."
            ) from e
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {str(e)}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ProviderError("Invalid response format")
        return response.choices[0].message.content

    def get_model_name(self) -> str:
        """Get the current model name."""
        return self.model
