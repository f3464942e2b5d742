"""Base completion provider interface and common functionality."""

from abc import ABC, abstractmethod
from typing import Dict, List

from ..config import ShellAIConfig


class ProviderError(Exception):
    """A completion request failed (transport, remote error or bad payload)."""

    pass


class CompletionProvider(ABC):
    """Abstract base class for all completion providers."""

    def __init__(self, config: ShellAIConfig):
        self.config = config

    @abstractmethod
    async def complete(self, system_message: str, user_message: str) -> str:
        """Run one completion round trip.

        Args:
            system_message: Instructions for the model
            user_message: The user's request

        Returns:
            The raw text produced by the model

        Raises:
            ProviderError: when no text could be obtained
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the current model name being used."""
        pass

    def _build_messages(
        self, system_message: str, user_message: str
    ) -> List[Dict[str, str]]:
        """Messages in OpenAI chat format."""
        return [
            {"role": "system", "content": system_message},
            {"role": "user", "content": user_message},
        ]
