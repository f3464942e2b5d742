"""Run a confirmed command according to what kind of command it is."""

import logging
import os
import subprocess
from enum import Enum
from typing import Optional

from .ui import print_output, warn

logger = logging.getLogger(__name__)

TEXT_EDITORS = ("vi", "vim", "emacs", "nano", "ed", "micro", "joe", "nvim")


class CommandKind(str, Enum):
    """How a command is dispatched."""

    EDITOR = "editor"
    CHANGE_DIRECTORY = "cd"
    CAPTURED = "captured"
    INTERACTIVE = "interactive"


def classify_command(command: str, ctx_mode: bool) -> CommandKind:
    """Classify ``command``; the first matching rule wins."""
    words = command.split(maxsplit=1)
    if words and words[0] in TEXT_EDITORS:
        return CommandKind.EDITOR
    if command.startswith("cd "):
        return CommandKind.CHANGE_DIRECTORY
    if ctx_mode:
        return CommandKind.CAPTURED
    return CommandKind.INTERACTIVE


def change_directory(target: str) -> bool:
    """Change the process working directory; ``~`` expands to the home dir."""
    path = os.path.expanduser(target.strip())
    try:
        os.chdir(path)
    except (OSError, ValueError) as e:
        logger.debug("chdir to %r failed: %s", path, e)
        return False
    return True


class CommandDispatcher:
    """Executes commands and, in context mode, captures their output.

    Failures are reported as warnings and never raised.
    """

    def execute(self, command: str, ctx_mode: bool) -> Optional[str]:
        kind = classify_command(command, ctx_mode)
        logger.debug("Dispatching %r as %s", command, kind.value)

        if kind == CommandKind.EDITOR:
            self._run_attached(command)
            return None

        if kind == CommandKind.CHANGE_DIRECTORY:
            if not change_directory(command[3:]):
                warn("Could not change directory.")
            return None

        if kind == CommandKind.CAPTURED:
            return self._run_captured(command)

        self._run_attached(command)
        return None

    def _run_attached(self, command: str) -> None:
        """Run through the shell with the terminal attached."""
        try:
            result = subprocess.run(command, shell=True)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            warn(f"Error executing command: {e}")
            return

        if result.returncode != 0:
            warn(f"Command exited with status {result.returncode}")

    def _run_captured(self, command: str) -> str:
        """Run through the shell and return stdout, or stderr on failure."""
        try:
            result = subprocess.run(
                command, shell=True, capture_output=True, text=True, check=True
            )
        except subprocess.CalledProcessError as e:
            warn(f"Error executing command: {e}")
            if e.stderr:
                print_output(e.stderr)
            return e.stderr or ""
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            warn(f"Error executing command: {e}")
            return ""

        if result.stdout:
            print_output("\n" + result.stdout)
        if result.stderr:
            print_output(result.stderr)
        return result.stdout
