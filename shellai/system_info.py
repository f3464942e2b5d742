"""Describe the local machine to the model: platform and available commands."""

import logging
import os
import platform
import subprocess
import time
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

# Common shell builtins that won't appear in PATH
# fmt: off
SHELL_BUILTINS = [
    "cd", "pwd", "echo", "printf", "export", "unset", "set", "source",
    "alias", "unalias", "bg", "fg", "jobs", "kill", "wait", "exec",
    "eval", "exit", "return", "break", "continue", "shift", "test",
    "true", "false", "read", "readonly", "local", "declare", "typeset",
    "trap", "umask", "ulimit", "times", "history", "fc", "pushd", "popd",
    "dirs", "shopt", "enable", "help", "logout", "mapfile", "readarray",
]
# fmt: on


def _read_os_release(path: Path) -> Dict[str, str]:
    values = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            key, sep, value = line.strip().partition("=")
            if sep:
                values[key] = value.replace('"', "")
    return values


def get_platform_info() -> str:
    """Sentence describing the OS the suggested command will run on."""
    system = platform.system().lower()
    release = platform.release()
    base = f"The system the shell command will be executed on is {system} {release}"

    if system == "linux":
        try:
            os_release = _read_os_release(OS_RELEASE_PATH)
        except OSError:
            return f"{base}."
        distro_id = os_release.get("ID", "unknown")
        version = os_release.get("VERSION_ID", "unknown")
        return f"{base}, running {distro_id} version {version}."

    return f"{base}."


def _commands_from_compgen() -> List[str]:
    """List commands with bash's compgen (fastest and most complete)."""
    try:
        result = subprocess.run(
            ["bash", "-c", "compgen -c"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("compgen failed: %s", e)
        return []
    return [line for line in result.stdout.splitlines() if line]


def _commands_from_path() -> List[str]:
    commands = set()
    for directory in os.environ.get("PATH", "").split(os.pathsep):
        if not directory:
            continue
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            try:
                if entry.is_file() and os.access(entry.path, os.X_OK):
                    commands.add(entry.name)
            except OSError:
                continue
    return list(commands)


def _filter_commands(commands: List[str]) -> List[str]:
    return sorted(
        cmd
        for cmd in set(commands)
        if len(cmd) >= 2 and not cmd.startswith(("_", "."))
    )


@lru_cache(maxsize=None)
def detect_available_commands() -> str:
    """Describe the executables available on this system.

    Computed once per process.
    """
    logger.debug("Detecting available commands...")
    start = time.monotonic()

    commands = _commands_from_compgen()
    if not commands:
        logger.debug("compgen returned nothing, scanning PATH...")
        commands = _commands_from_path()

    filtered = _filter_commands(commands + SHELL_BUILTINS)
    logger.debug(
        "Found %d commands in %.0fms",
        len(filtered),
        (time.monotonic() - start) * 1000,
    )

    return (
        f"Available commands on this system ({len(filtered)} total):\n"
        f"{', '.join(filtered)}"
    )
