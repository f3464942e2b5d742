"""Shared UI helpers for console output, logging and interactive prompts."""

import logging
from enum import Enum
from typing import List, Union

import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import LogLevel, ShellAIConfig

# Shared console instance so Rich live displays and prompts coordinate correctly.
console = Console()

LOGGER_NAME = "shellai"


class MenuOption(Enum):
    """Menu entries listed after the suggestions, labelled by their value."""

    GEN_SUGGESTIONS = "Generate new suggestions"
    NEW_COMMAND = "Enter a new command"
    DISMISS = "Dismiss"


GEN_SUGGESTIONS = MenuOption.GEN_SUGGESTIONS
NEW_COMMAND = MenuOption.NEW_COMMAND
DISMISS = MenuOption.DISMISS


def setup_logging(config: ShellAIConfig) -> logging.Logger:
    """Route package diagnostics through a Rich handler on the shared console."""
    level = LogLevel.DEBUG if config.show_debug else config.log_level
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.value.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console, show_path=False, rich_tracebacks=True, markup=False
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def warn(message: str) -> None:
    """Print a user-facing warning."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}", highlight=False)


def print_output(text: str) -> None:
    """Print raw command output without Rich markup processing."""
    console.print(text, markup=False, highlight=False, end="")


def handle_error(error: Exception, debug: bool = False):
    """Handle and display errors with appropriate formatting."""
    if debug:
        console.print("\n[bold red]Debug Error Details:[/bold red]")
        console.print_exception()
    else:
        console.print(f"\n[bold red]Error:[/bold red] {str(error)}")
        console.print("[dim]Use --debug for more details[/dim]")


class Prompter:
    """Interactive prompts for the suggestion loop.

    Every method raises ``KeyboardInterrupt`` on Ctrl+C and ``EOFError`` on
    Ctrl+D.
    """

    async def select_command(
        self, suggestions: List[str]
    ) -> Union[str, MenuOption]:
        """Return the chosen suggestion or a ``MenuOption``."""
        choices = list(suggestions) + [
            questionary.Separator(),
            *(questionary.Choice(title=o.value, value=o) for o in MenuOption),
        ]
        return await questionary.select(
            "Select a command:", choices=choices, qmark=">"
        ).unsafe_ask_async()

    async def confirm_command(self, command: str) -> str:
        """Let the user edit the command before it runs."""
        return await questionary.text(
            "Confirm:", default=command, qmark=">"
        ).unsafe_ask_async()

    async def ask_prompt(self, message: str) -> str:
        return await questionary.text(message, qmark=">").unsafe_ask_async()
