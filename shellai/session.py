"""Interactive suggestion loop: prompt, suggest, choose, run, repeat."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import ShellAIConfig
from .context import ContextBuffer
from .executor import CommandDispatcher
from .history import ShellHistory
from .suggestions import SuggestionEngine
from .system_info import get_platform_info
from .ui import DISMISS, GEN_SUGGESTIONS, NEW_COMMAND, Prompter, console, warn

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class LoopState(str, Enum):
    """States of the interaction loop."""

    AWAITING_PROMPT = "awaiting_prompt"
    GENERATING = "generating"
    PRESENTING = "presenting"
    CONFIRMING = "confirming"
    EXECUTING = "executing"
    TERMINATED = "terminated"


@dataclass
class InteractionState:
    """Per-session state threaded through each loop iteration."""

    prompt: str
    ctx_mode: bool
    last_output: Optional[str] = None
    step: LoopState = LoopState.GENERATING


class InteractionLoop:
    """Drives one session from the initial request until exit.

    In context mode the loop keeps going after each command, feeding the
    captured output into the next request; otherwise it stops after the
    first executed command.
    """

    def __init__(
        self,
        config: ShellAIConfig,
        engine: SuggestionEngine,
        dispatcher: Optional[CommandDispatcher] = None,
        prompter: Optional[Prompter] = None,
        history: Optional[ShellHistory] = None,
        context: Optional[ContextBuffer] = None,
        platform_info: Optional[str] = None,
    ):
        self.config = config
        self.engine = engine
        self.dispatcher = dispatcher or CommandDispatcher()
        self.prompter = prompter or Prompter()
        self.history = history or ShellHistory()
        self.context = context if context is not None else ContextBuffer()
        self.platform_info = platform_info or get_platform_info()
        self.state: Optional[InteractionState] = None

    async def run(self, prompt: str, ctx_mode: bool = False) -> int:
        """Run the session and return the process exit code."""
        self.state = state = InteractionState(prompt=prompt, ctx_mode=ctx_mode)

        if ctx_mode:
            console.print(
                "[bold yellow]WARNING[/bold yellow] Context mode: command output "
                "will be sent to the completion provider, be careful with "
                "sensitive data...\n"
            )
            self._print_cwd()

        try:
            return await self._run_loop(state)
        except (KeyboardInterrupt, EOFError):
            console.print("\nExiting...")
            return EXIT_OK
        finally:
            state.step = LoopState.TERMINATED

    async def _run_loop(self, state: InteractionState) -> int:
        while True:
            state.step = LoopState.GENERATING
            suggestions = await self._generate(state)
            if not suggestions:
                console.print(
                    "No suggestions could be generated. "
                    "Please try again with a different prompt."
                )
                return EXIT_FAILURE

            state.step = LoopState.PRESENTING
            selection = await self.prompter.select_command(suggestions)

            if selection is DISMISS:
                return EXIT_OK
            if selection is NEW_COMMAND:
                state.step = LoopState.AWAITING_PROMPT
                state.prompt = await self._ask_prompt("New command:")
                continue
            if selection is GEN_SUGGESTIONS:
                continue

            command = selection
            if not self.config.skip_confirm:
                state.step = LoopState.CONFIRMING
                command = await self.prompter.confirm_command(selection)
            if not command.strip():
                logger.debug("Empty command confirmed, regenerating")
                continue

            if not self.config.skip_history:
                self._record_history(command)

            state.step = LoopState.EXECUTING
            state.last_output = self.dispatcher.execute(command, state.ctx_mode)

            if not state.ctx_mode:
                return EXIT_OK

            if state.last_output:
                self.context.replace(state.last_output)

            state.step = LoopState.AWAITING_PROMPT
            self._print_cwd()
            state.prompt = await self._ask_prompt("New command:")

    async def _generate(self, state: InteractionState) -> List[str]:
        context = None
        if state.ctx_mode and len(self.context) > 0:
            context = self.context.read()
        with console.status(
            f"[dim]Thinking with {self.engine.model_name}...[/dim]"
        ):
            return await self.engine.generate(
                state.prompt, self.platform_info, context
            )

    async def _ask_prompt(self, message: str) -> str:
        prompt = ""
        while not prompt.strip():
            prompt = await self.prompter.ask_prompt(message)
        return prompt.strip()

    def _record_history(self, command: str) -> None:
        result = self.history.append(command)
        if result.warning:
            warn(result.warning)

    def _print_cwd(self) -> None:
        console.print(f">>> {os.getcwd()}", markup=False, highlight=False)
