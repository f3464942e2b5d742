"""Main entry point for the Shell AI command-line assistant."""

import asyncio
import logging
from typing import List, Optional, Tuple

import typer

from shellai.config import (
    API_KEY_FIELDS,
    ConfigurationError,
    ShellAIConfig,
    get_config_path,
    load_configuration,
    sample_config_document,
    validate_api_setup,
)
from shellai.session import InteractionLoop
from shellai.suggestions import SuggestionEngine
from shellai.ui import console, handle_error, setup_logging

logger = logging.getLogger("shellai.main")

CTX_FLAG = "--ctx"
USAGE_HINT = "Describe what you want to do as a single sentence. `shai <sentence>`"

# Initialize Typer app with rich formatting
app = typer.Typer(
    name="shai",
    help="Shell AI - turn a natural-language request into a shell command",
    add_completion=False,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        from . import __version__

        console.print(f"Shell AI version {__version__}")
        raise typer.Exit()


def show_config_callback(value: bool):
    """Show current configuration and exit."""
    if value:
        config = load_configuration()

        console.print("\n[bold blue]Shell AI Configuration[/bold blue]")
        console.print(f"Config file: [dim]{get_config_path()}[/dim]")
        console.print(f"Provider: [cyan]{config.llm_provider.value}[/cyan]")
        console.print(f"Model: [cyan]{config.get_current_model()}[/cyan]")
        console.print(
            f"API Key: [green]{'✓ Set' if config.get_current_api_key() else '✗ Not set'}[/green]"
        )
        console.print(f"Suggestions: [cyan]{config.suggestion_count}[/cyan]")
        console.print(f"Temperature: [cyan]{config.temperature}[/cyan]")
        console.print(
            f"Confirmation required: [cyan]{'No' if config.skip_confirm else 'Yes'}[/cyan]"
        )
        console.print(
            f"Shell history: [cyan]{'Disabled' if config.skip_history else 'Enabled'}[/cyan]"
        )
        console.print(
            f"Context mode: [cyan]{'Enabled' if config.ctx else 'Disabled'}[/cyan]"
        )
        raise typer.Exit()


def split_ctx_flag(words: List[str]) -> Tuple[List[str], bool]:
    """Remove every ``--ctx`` from the request words."""
    remaining = [word for word in words if word != CTX_FLAG]
    return remaining, len(remaining) != len(words)


def show_setup_instructions(error: ConfigurationError, config: ShellAIConfig):
    """Explain how to provide the missing credential."""
    console.print(f"[bold red]Error:[/bold red] {error}")
    console.print(
        f"You can create a config file at [cyan]{get_config_path()}[/cyan]"
    )
    console.print("\nExample config:")
    console.print(
        sample_config_document(config.llm_provider), markup=False, highlight=False
    )


async def run_session(prompt: str, config: ShellAIConfig, ctx_mode: bool) -> int:
    """Run one interactive session and return its exit code."""
    engine = SuggestionEngine(config)
    loop = InteractionLoop(config, engine)
    return await loop.run(prompt, ctx_mode=ctx_mode)


@app.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": True,
    }
)
def main(
    query: List[str] = typer.Argument(
        None, help="What you want to do, in plain words."
    ),
    ctx: bool = typer.Option(
        False,
        CTX_FLAG,
        help="Context mode: keep running and feed command output to follow-up requests.",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug output and detailed error information"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config-file", help="Path to custom configuration file"
    ),
    model: Optional[str] = typer.Option(
        None, "--model", help="Override the model of the selected provider"
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        help="Override the provider (openrouter, openai, anthropic, google)",
    ),
    no_confirm: bool = typer.Option(
        False, "--no-confirm", help="Run the selected command without editing it"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit.",
    ),
    show_config: Optional[bool] = typer.Option(
        None,
        "--show-config",
        callback=show_config_callback,
        is_eager=True,
        help="Show current configuration and exit.",
    ),
):
    """Suggest shell commands for a request and run the one you pick."""
    words, ctx_in_query = split_ctx_flag(list(query or []))
    prompt = " ".join(words).strip()

    if not prompt:
        console.print(USAGE_HINT, markup=False, highlight=False)
        raise typer.Exit()

    try:
        config = load_configuration(
            config_file=config_file,
            debug=debug,
            model_override=model,
            provider_override=provider,
        )
    except ConfigurationError as e:
        handle_error(e, debug)
        raise typer.Exit(1)

    if no_confirm:
        config.skip_confirm = True

    setup_logging(config)
    logger.debug(
        "Loaded configuration: %s",
        config.model_dump(exclude=set(API_KEY_FIELDS.values())),
    )

    try:
        validate_api_setup(config)
    except ConfigurationError as e:
        show_setup_instructions(e, config)
        raise typer.Exit(1)

    ctx_mode = ctx or ctx_in_query or config.ctx

    try:
        exit_code = asyncio.run(run_session(prompt, config, ctx_mode))
    except KeyboardInterrupt:
        console.print("\nExiting...")
        raise typer.Exit(0)
    except Exception as e:
        handle_error(e, config.show_debug)
        raise typer.Exit(1)

    raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
