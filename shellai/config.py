"""Configuration management for Shell AI with multi-source loading."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, validator

logger = logging.getLogger(__name__)

CONFIG_APP_NAME = "shell-ai"


class LogLevel(str, Enum):
    """Available logging levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LLMProvider(str, Enum):
    """Available completion providers."""

    OPENROUTER = "openrouter"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"


# Environment variable names, keyed by configuration field.
ENV_VARS: Dict[str, str] = {
    "llm_provider": "SHAI_PROVIDER",
    "openrouter_api_key": "OPENROUTER_API_KEY",
    "openrouter_model": "OPENROUTER_MODEL",
    "openai_api_key": "OPENAI_API_KEY",
    "openai_model": "OPENAI_MODEL",
    "anthropic_api_key": "ANTHROPIC_API_KEY",
    "anthropic_model": "ANTHROPIC_MODEL",
    "google_api_key": "GOOGLE_API_KEY",
    "google_model": "GOOGLE_MODEL",
    "suggestion_count": "SHAI_SUGGESTION_COUNT",
    "skip_confirm": "SHAI_SKIP_CONFIRM",
    "skip_history": "SHAI_SKIP_HISTORY",
    "temperature": "SHAI_TEMPERATURE",
    "ctx": "CTX",
    "show_debug": "DEBUG",
    "log_level": "SHAI_LOG_LEVEL",
}

API_KEY_FIELDS = {
    LLMProvider.OPENROUTER: "openrouter_api_key",
    LLMProvider.OPENAI: "openai_api_key",
    LLMProvider.ANTHROPIC: "anthropic_api_key",
    LLMProvider.GOOGLE: "google_api_key",
}

MODEL_FIELDS = {
    LLMProvider.OPENROUTER: "openrouter_model",
    LLMProvider.OPENAI: "openai_model",
    LLMProvider.ANTHROPIC: "anthropic_model",
    LLMProvider.GOOGLE: "google_model",
}


class ShellAIConfig(BaseModel):
    """Main configuration class with validation and multi-source loading."""

    # Provider Configuration
    llm_provider: LLMProvider = Field(
        default=LLMProvider.OPENROUTER, description="Completion provider"
    )
    openrouter_api_key: Optional[str] = Field(
        default=None, description="OpenRouter API key"
    )
    openrouter_model: str = Field(
        default="anthropic/claude-3.5-sonnet", description="OpenRouter model"
    )
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model")
    anthropic_api_key: Optional[str] = Field(
        default=None, description="Anthropic API key"
    )
    anthropic_model: str = Field(
        default="claude-3-5-sonnet-latest", description="Anthropic model"
    )
    google_api_key: Optional[str] = Field(default=None, description="Google AI API key")
    google_model: str = Field(default="gemini-1.5-flash", description="Google model")
    temperature: float = Field(default=0.05, description="Sampling temperature")

    # Suggestion Configuration
    suggestion_count: int = Field(
        default=3, description="Number of completions requested per prompt"
    )
    skip_confirm: bool = Field(
        default=False, description="Execute the selected command without editing"
    )
    skip_history: bool = Field(
        default=False, description="Do not append commands to the shell history"
    )
    ctx: bool = Field(default=False, description="Enable context mode by default")

    # Output Configuration
    show_debug: bool = Field(default=False, description="Show debug information")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")

    @validator("suggestion_count")
    def validate_suggestion_count(cls, v):
        """Require at least one suggestion per request."""
        if v < 1:
            raise ValueError("suggestion_count must be at least 1")
        return v

    @validator(
        "openrouter_api_key",
        "openai_api_key",
        "anthropic_api_key",
        "google_api_key",
        pre=True,
    )
    def validate_api_keys(cls, v):
        """Validate and sanitize API keys."""
        if v and isinstance(v, str):
            return v.strip()
        return v

    @validator("llm_provider", "log_level", pre=True)
    def normalize_enum_values(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def get_current_model(self) -> str:
        """Get the current model for the selected provider."""
        return getattr(self, MODEL_FIELDS[self.llm_provider])

    def get_current_api_key(self) -> Optional[str]:
        """Get the API key for the current provider."""
        return getattr(self, API_KEY_FIELDS[self.llm_provider])

    def validate_current_setup(self) -> bool:
        """Validate that current provider has necessary configuration."""
        api_key = self.get_current_api_key()
        return api_key is not None and len(api_key.strip()) > 0


def get_config_path() -> Path:
    """Get the user configuration file path for this platform."""
    if os.name == "nt":
        app_data = os.environ.get("APPDATA") or str(
            Path.home() / "AppData" / "Roaming"
        )
        return Path(app_data) / CONFIG_APP_NAME / "config.toml"
    return Path.home() / ".config" / CONFIG_APP_NAME / "config.toml"


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map field names and environment-style names onto field names."""
    by_env_name = {env.lower(): field for field, env in ENV_VARS.items()}
    normalized = {}
    for key, value in data.items():
        lowered = key.lower()
        if lowered in ENV_VARS:
            normalized[lowered] = value
        elif lowered in by_env_name:
            normalized[by_env_name[lowered]] = value
        else:
            logger.debug("Ignoring unknown configuration key: %s", key)
    return normalized


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a TOML file."""
    logger.debug("Looking for config file at: %s", config_path)
    try:
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = toml.load(f)
            logger.debug("Loaded config file %s", config_path)
            return _normalize_keys(data)
        logger.debug("No config file found, using default configuration")
    except (OSError, toml.TomlDecodeError) as e:
        logger.debug("Error loading config file %s: %s", config_path, e)
    return {}


def _convert_env_value(value: str) -> Any:
    if value.lower() in ("true", "1", "yes", "on"):
        return True
    if value.lower() in ("false", "0", "no", "off"):
        return False
    return value


def load_environment_variables() -> Dict[str, Any]:
    """Load configuration from environment variables."""
    config = {}

    for field, env_var in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is None or value == "":
            continue
        if field in ("suggestion_count", "temperature") or field.endswith(
            ("_api_key", "_model")
        ):
            config[field] = value
        else:
            config[field] = _convert_env_value(value)

    return config


def _build_config(values: Dict[str, Any], source: str) -> Optional[ShellAIConfig]:
    try:
        return ShellAIConfig(**values)
    except ValidationError as e:
        logger.debug("Invalid configuration from %s, ignoring it: %s", source, e)
        return None


def _drop_invalid_fields(
    values: Dict[str, Any], base: Dict[str, Any], source: str
) -> Dict[str, Any]:
    """Return ``values`` without the fields that fail validation on top of ``base``."""
    values = dict(values)
    while values:
        try:
            ShellAIConfig(**{**base, **values})
            break
        except ValidationError as e:
            invalid = {
                error["loc"][0] for error in e.errors() if error["loc"]
            } & values.keys()
            if not invalid:
                logger.debug(
                    "Invalid configuration from %s, ignoring it: %s", source, e
                )
                return {}
            for field in invalid:
                logger.debug(
                    "Ignoring invalid %s from %s: %r", field, source, values.pop(field)
                )
    return values


def load_configuration(
    config_file: Optional[str] = None,
    debug: bool = False,
    model_override: Optional[str] = None,
    provider_override: Optional[str] = None,
) -> ShellAIConfig:
    """Load configuration from multiple sources with priority handling.

    Priority order (highest to lowest):
    1. Function parameters (debug, model_override, provider_override)
    2. Environment variables
    3. Config file (``config_file`` or the per-user config.toml)
    4. Default values

    Values that fail validation are dropped one field at a time, so the
    next source down supplies them instead.
    """
    config_path = Path(config_file) if config_file else get_config_path()

    file_config = _drop_invalid_fields(
        load_config_file(config_path), {}, str(config_path)
    )
    env_config = _drop_invalid_fields(
        load_environment_variables(), file_config, "environment"
    )

    merged_config = {**file_config, **env_config}

    if debug:
        merged_config["show_debug"] = True
        merged_config["log_level"] = LogLevel.DEBUG

    if provider_override:
        merged_config["llm_provider"] = provider_override

    config = _build_config(merged_config, "command line")
    if config is None:
        raise ConfigurationError(f"Unknown provider: {provider_override}")

    if model_override:
        setattr(config, MODEL_FIELDS[config.llm_provider], model_override)

    return config


def sample_config_document(
    provider: LLMProvider = LLMProvider.OPENROUTER,
) -> str:
    """Render a sample config.toml for setup instructions."""
    document = {
        ENV_VARS[API_KEY_FIELDS[provider]]: "your_api_key_here",
        ENV_VARS[MODEL_FIELDS[provider]]: getattr(
            ShellAIConfig(), MODEL_FIELDS[provider]
        ),
    }
    if provider != LLMProvider.OPENROUTER:
        document[ENV_VARS["llm_provider"]] = provider.value
    return toml.dumps(document)


class ConfigurationError(Exception):
    """Configuration-related errors."""

    pass


def validate_api_setup(config: ShellAIConfig) -> None:
    """Validate that API setup is correct for current provider."""
    if not config.validate_current_setup():
        provider = config.llm_provider.value
        env_var = ENV_VARS[API_KEY_FIELDS[config.llm_provider]]
        raise ConfigurationError(
            f"No API key configured for {provider}. "
            f"Set the {env_var} environment variable or add it to your config file."
        )
