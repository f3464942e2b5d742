"""Append executed commands to the user's interactive shell history file."""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

HistoryFormatter = Callable[[int, str], str]


def _extended_format(timestamp: int, command: str) -> str:
    return f": {timestamp}:0;{command}\n"


def _csh_format(timestamp: int, command: str) -> str:
    return f"{timestamp} {command}\n"


def _fish_format(timestamp: int, command: str) -> str:
    return f"- cmd: {command}\n  when: {timestamp}\n"


@dataclass(frozen=True)
class HistoryTarget:
    """Where and how a given shell keeps its history."""

    shell: str
    path: Path
    formatter: HistoryFormatter


@dataclass(frozen=True)
class HistoryWriteResult:
    """Outcome of a best-effort history write."""

    written: bool
    warning: Optional[str] = None


def resolve_history_target(
    shell: str, home: Optional[Path] = None
) -> Optional[HistoryTarget]:
    """Pick the history file and line format for a shell executable path."""
    home = home or Path.home()
    if "zsh" in shell:
        return HistoryTarget("zsh", home / ".zsh_history", _extended_format)
    elif "bash" in shell:
        return HistoryTarget("bash", home / ".bash_history", _extended_format)
    elif "csh" in shell:
        return HistoryTarget("csh", home / ".history", _csh_format)
    elif "ksh" in shell:
        return HistoryTarget("ksh", home / ".sh_history", _extended_format)
    elif "fish" in shell:
        return HistoryTarget(
            "fish",
            home / ".local" / "share" / "fish" / "fish_history",
            _fish_format,
        )
    return None


class ShellHistory:
    """Writes commands into the history file of the user's login shell."""

    def __init__(self, shell: Optional[str] = None, home: Optional[Path] = None):
        self.shell = shell if shell is not None else os.environ.get("SHELL", "")
        self.target = resolve_history_target(self.shell, home)

    def append(self, command: str, timestamp: Optional[int] = None) -> HistoryWriteResult:
        """Append ``command``; never raises."""
        if self.target is None:
            return HistoryWriteResult(
                written=False,
                warning=(
                    "Unsupported shell. History will not be saved. "
                    "Set SHAI_SKIP_HISTORY=true to disable this warning."
                ),
            )

        if timestamp is None:
            timestamp = int(time.time())

        try:
            with open(self.target.path, "a", encoding="utf-8") as f:
                f.write(self.target.formatter(timestamp, command))
        except OSError as e:
            logger.debug("History write to %s failed: %s", self.target.path, e)
            return HistoryWriteResult(
                written=False, warning="Could not write to shell history."
            )

        logger.debug("Appended command to %s", self.target.path)
        return HistoryWriteResult(written=True)
