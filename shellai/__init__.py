"""Shell AI - turn natural-language requests into shell commands.

The assistant asks a completion provider for several candidate commands,
lets the user pick and edit one, runs it, and in context mode feeds the
command output back into follow-up requests.
"""

from .config import ShellAIConfig
from .context import ContextBuffer
from .executor import CommandDispatcher
from .extractor import CommandFound, NoCommand, parse_command
from .main import app
from .session import InteractionLoop
from .suggestions import SuggestionEngine

__version__ = "0.1.0"

__all__ = [
    "app",
    "ShellAIConfig",
    "ContextBuffer",
    "CommandDispatcher",
    "CommandFound",
    "NoCommand",
    "parse_command",
    "InteractionLoop",
    "SuggestionEngine",
]
