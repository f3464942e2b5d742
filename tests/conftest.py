"""Test configuration for pytest."""

import shutil
import tempfile
from pathlib import Path
from typing import List

import pytest

from shellai.config import ENV_VARS, LLMProvider, ShellAIConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_config():
    """Create a sample configuration for testing."""
    config = ShellAIConfig(
        llm_provider=LLMProvider.OPENROUTER,
        openrouter_api_key="test-key-123",
        openrouter_model="test/model",
        suggestion_count=3,
        skip_confirm=False,
        skip_history=False,
        show_debug=False,
    )
    return config


@pytest.fixture(autouse=True)
def setup_test_environment(temp_dir, monkeypatch):
    """Isolate tests from the user's environment, config file and history."""
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setenv("HOME", str(temp_dir))
    monkeypatch.setenv("APPDATA", str(temp_dir))
    yield


class ScriptedPrompter:
    """Prompter replaying canned answers; exceptions in a script are raised."""

    def __init__(self, selections=(), confirmations=(), prompts=()):
        self.selections = list(selections)
        self.confirmations = list(confirmations)
        self.prompts = list(prompts)
        self.presented: List[List[str]] = []
        self.confirm_defaults: List[str] = []
        self.prompt_messages: List[str] = []

    @staticmethod
    def _next(script):
        answer = script.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    async def select_command(self, suggestions):
        self.presented.append(list(suggestions))
        return self._next(self.selections)

    async def confirm_command(self, command):
        self.confirm_defaults.append(command)
        return self._next(self.confirmations)

    async def ask_prompt(self, message):
        self.prompt_messages.append(message)
        return self._next(self.prompts)


@pytest.fixture
def scripted_prompter():
    """Factory for prompters with canned answers."""
    return ScriptedPrompter
