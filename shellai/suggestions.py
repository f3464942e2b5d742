"""Suggestion engine: fan out completion requests and collect unique commands."""

import asyncio
import logging
from typing import Callable, List, Optional

from .config import ShellAIConfig
from .context import MAX_CONTEXT_CHARS
from .extractor import CommandFound, parse_command
from .providers import CompletionProvider, get_provider
from .system_info import detect_available_commands

logger = logging.getLogger(__name__)


def build_system_message(
    platform_info: str, available_commands: str, context: Optional[str] = None
) -> str:
    """Get the system prompt asking for a single JSON-wrapped command."""
    system_message = (
        "You are an expert at using shell commands. I need you to provide a "
        'response in the format `{"command": "your_shell_command_here"}`. '
        f"{platform_info}\n\n"
        f"{available_commands}\n\n"
        "Pick the most appropriate command(s) from the list above or combine "
        "them with pipes and flags as needed. Only provide a single executable "
        'line of shell code as the value for the "command" key. Never output '
        "any text outside the JSON structure. The command will be directly "
        "executed in a shell. For example, if I ask to display the message abc, "
        'you should respond with ```json\n{"command": "echo abc"}\n```. '
        "Make sure the output is valid JSON."
    )

    if context:
        system_message += (
            f" Between [], these are the last {MAX_CONTEXT_CHARS} characters "
            "from the previous command's output, you can use them as "
            f"context: [{context}]"
        )

    return system_message


def build_user_message(prompt: str) -> str:
    return f"Generate a shell command that satisfies this user request: {prompt}"


def unique_in_order(candidates: List[Optional[str]]) -> List[str]:
    """Drop empty results and duplicates, keeping first-seen order."""
    seen = set()
    unique = []
    for candidate in candidates:
        if candidate is None or candidate in seen:
            continue
        seen.add(candidate)
        unique.append(candidate)
    return unique


class SuggestionEngine:
    """Requests several completions in parallel and turns them into commands."""

    def __init__(
        self,
        config: ShellAIConfig,
        provider: Optional[CompletionProvider] = None,
        available_commands: Callable[[], str] = detect_available_commands,
    ):
        self.config = config
        self.provider = provider or get_provider(config)
        self.available_commands = available_commands

    @property
    def model_name(self) -> str:
        return self.provider.get_model_name()

    async def generate(
        self, prompt: str, platform_info: str, context: Optional[str] = None
    ) -> List[str]:
        """Return the unique commands suggested for ``prompt``.

        Exactly ``suggestion_count`` requests are issued concurrently and all
        of them are awaited. Failed requests and unusable responses are
        skipped, so the result may be empty.
        """
        system_message = build_system_message(
            platform_info, self.available_commands(), context
        )
        user_message = build_user_message(prompt)

        results = await asyncio.gather(
            *(
                self._suggest_one(index, system_message, user_message)
                for index in range(self.config.suggestion_count)
            )
        )

        suggestions = unique_in_order(list(results))
        logger.debug(
            "%d of %d requests produced %d unique suggestions",
            sum(r is not None for r in results),
            self.config.suggestion_count,
            len(suggestions),
        )
        return suggestions

    async def _suggest_one(
        self, index: int, system_message: str, user_message: str
    ) -> Optional[str]:
        try:
            response = await self.provider.complete(system_message, user_message)
            result = parse_command(response)
        except Exception as e:
            logger.debug("Error generating suggestion %d: %s", index, e)
            return None

        if isinstance(result, CommandFound):
            return result.command

        logger.debug("Suggestion %d discarded: %s", index, result.reason)
        return None
