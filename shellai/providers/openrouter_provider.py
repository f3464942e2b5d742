"""OpenRouter provider implementation for Shell AI."""

import asyncio
import json
import logging
from typing import Any, Dict

import aiohttp

from ..config import ShellAIConfig
from .base import CompletionProvider, ProviderError

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class OpenRouterProvider(CompletionProvider):
    """OpenRouter chat completions over plain HTTPS."""

    def __init__(self, config: ShellAIConfig):
        super().__init__(config)
        self.api_key = config.openrouter_api_key
        self.model = config.openrouter_model

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": "https://github.com/shell-ai",
            "X-Title": "Shell-AI",
        }

    async def complete(self, system_message: str, user_message: str) -> str:
        """Generate a completion using the OpenRouter API."""
        payload = {
            "model": self.model,
            "messages": self._build_messages(system_message, user_message),
            "temperature": self.config.temperature,
        }
        logger.debug("Request payload: %s", json.dumps(payload))

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    OPENROUTER_URL, json=payload, headers=self._headers()
                ) as response:
                    body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"OpenRouter request failed: {e}") from e

        logger.debug("Response: %s", body)
        return self._parse_response(body)

    def _parse_response(self, body: str) -> str:
        try:
            data: Any = json.loads(body)
        except ValueError as e:
            raise ProviderError(f"Malformed response from OpenRouter: {e}") from e

        if not isinstance(data, dict):
            raise ProviderError("Invalid response format")

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderError(message or "Unknown OpenRouter error")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            raise ProviderError("Invalid response format")
        return content

    def get_model_name(self) -> str:
        """Get the current model name."""
        return self.model
