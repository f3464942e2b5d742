"""Unit tests for the main CLI entry point."""

import pytest
from typer.testing import CliRunner

from shellai.main import USAGE_HINT, app, split_ctx_flag
from shellai.ui import handle_error

runner = CliRunner()


@pytest.fixture
def session(mocker):
    return mocker.patch("shellai.main.run_session", mocker.AsyncMock(return_value=0))


def test_no_args_shows_usage(mocker):
    """Running without a request prints the usage hint and exits cleanly."""
    load = mocker.patch("shellai.main.load_configuration")
    run = mocker.patch("shellai.main.run_session")

    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert USAGE_HINT in result.stdout
    load.assert_not_called()
    run.assert_not_called()


def test_only_ctx_flag_shows_usage(session):
    result = runner.invoke(app, ["--ctx"])

    assert result.exit_code == 0
    assert USAGE_HINT in result.stdout
    session.assert_not_called()


def test_version_callback():
    """Test the --version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "Shell AI version" in result.stdout


def test_show_config_callback():
    """Test the --show-config flag."""
    result = runner.invoke(app, ["--show-config"])
    assert result.exit_code == 0
    assert "Shell AI Configuration" in result.stdout
    assert "Not set" in result.stdout


def test_missing_api_key_shows_setup(session):
    result = runner.invoke(app, ["list", "files"])

    assert result.exit_code == 1
    assert "OPENROUTER_API_KEY" in result.stdout
    assert "Example config" in result.stdout
    session.assert_not_called()


def test_missing_api_key_for_selected_provider(session):
    result = runner.invoke(app, ["--provider", "anthropic", "list", "files"])

    assert result.exit_code == 1
    assert "ANTHROPIC_API_KEY" in result.stdout


def test_unknown_provider(session):
    result = runner.invoke(app, ["--provider", "nonsense", "list", "files"])

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    session.assert_not_called()


def test_request_words_and_ctx_flag(session, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")

    result = runner.invoke(app, ["list", "--ctx", "files", "-la"])

    assert result.exit_code == 0
    prompt, config, ctx_mode = session.await_args.args
    assert prompt == "list files -la"
    assert ctx_mode is True
    assert config.openrouter_api_key == "env-key"


def test_ctx_from_environment(session, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
    monkeypatch.setenv("CTX", "true")

    runner.invoke(app, ["show", "disk", "usage"])

    assert session.await_args.args[2] is True


def test_cli_overrides(session, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")

    result = runner.invoke(
        app,
        ["--provider", "openai", "--model", "gpt-test", "--no-confirm", "whoami"],
    )

    assert result.exit_code == 0
    prompt, config, ctx_mode = session.await_args.args
    assert prompt == "whoami"
    assert ctx_mode is False
    assert config.get_current_model() == "gpt-test"
    assert config.skip_confirm is True


def test_session_exit_code_is_propagated(session, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
    session.return_value = 1

    result = runner.invoke(app, ["gibberish"])

    assert result.exit_code == 1


def test_session_error(session, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
    session.side_effect = RuntimeError("boom")

    result = runner.invoke(app, ["list", "files"])

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert "boom" in result.stdout


def test_split_ctx_flag():
    assert split_ctx_flag(["a", "--ctx", "b", "--ctx"]) == (["a", "b"], True)
    assert split_ctx_flag(["a", "b"]) == (["a", "b"], False)


def test_handle_error(capsys):
    """Test error handling."""
    handle_error(ValueError("test error"), debug=False)
    captured = capsys.readouterr()
    assert "Error:" in captured.out
    assert "test error" in captured.out

    try:
        raise ValueError("debug error")
    except ValueError as e:
        handle_error(e, debug=True)

    captured = capsys.readouterr()
    assert "Debug Error Details" in captured.out
    assert "debug error" in captured.out
