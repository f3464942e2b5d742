"""Google AI provider implementation for Shell AI."""

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError

from ..config import ShellAIConfig
from .base import CompletionProvider, ProviderError


class GoogleProvider(CompletionProvider):
    """Google AI provider implementation using Gemini models."""

    def __init__(self, config: ShellAIConfig):
        super().__init__(config)
        genai.configure(api_key=config.google_api_key)
        self.model_name = config.google_model

    async def complete(self, system_message: str, user_message: str) -> str:
        """Generate a completion using the Google AI API."""
        # The system instruction is fixed per model instance
        model = genai.GenerativeModel(
            self.model_name, system_instruction=system_message
        )
        generation_config = genai.types.GenerationConfig(
            temperature=self.config.temperature,
            max_output_tokens=1024,
        )

        try:
            response = await model.generate_content_async(
                user_message, generation_config=generation_config
            )
        except GoogleAPIError as e:
            raise ProviderError(f"Google AI API error: {str(e)}") from e

        content = ""
        if response.candidates:
            for part in response.candidates[0].content.parts:
                if hasattr(part, "text"):
                    content += part.text
        if not content:
            raise ProviderError("Invalid response format")
        return content

    def get_model_name(self) -> str:
        """Get the current model name."""
        return self.model_name
