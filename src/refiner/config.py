"""Configuration loading and persistence."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .models import (
    DEFAULT_MODEL,
    OutputDestination,
    OutputFormat,
    PromptFlavor,
    PromptType,
)

logger = logging.getLogger("refiner")

DEFAULT_CONFIG_PATH = "~/.refiner/config.yaml"

_ENV_REF_RE = re.compile(r"\$\{(\w+)\}")

# Env var names checked (in order) when no key is stored in the config file
API_KEY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
    "google": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


class TemperatureConfig(BaseModel):
    generative: float = 0.7
    reasoning: float = 0.2


class StreamingConfig(BaseModel):
    enabled: bool = False
    show_thinking: bool = False
    thinking_budget_tokens: int = 10000


class RefinerConfig(BaseModel):
    default_model: str = DEFAULT_MODEL
    default_type: PromptType = PromptType.GENERATIVE
    default_format: OutputFormat = OutputFormat.MARKDOWN
    default_output: OutputDestination = OutputDestination.CLIPBOARD
    default_flavor: PromptFlavor = PromptFlavor.DETAILED
    api_key: str = ""  # OpenAI
    claude_api_key: str = ""
    gemini_api_key: str = ""
    temperature: TemperatureConfig = Field(default_factory=TemperatureConfig)
    streaming: StreamingConfig = Field(default_factory=StreamingConfig)
    max_output_tokens: int = 16000

    def get_api_key(self, provider: str) -> str:
        """Stored key for ``provider``, falling back to its environment variables."""
        stored = {
            "openai": self.api_key,
            "anthropic": self.claude_api_key,
            "google": self.gemini_api_key,
        }.get(provider, "")
        if stored:
            return stored
        for var in API_KEY_ENV_VARS.get(provider, ()):
            value = os.environ.get(var, "")
            if value:
                return value
        return ""

    def get_temperature(self, prompt_type: PromptType | str) -> float:
        return getattr(self.temperature, PromptType(prompt_type).value)


def load_env() -> None:
    """Load a .env file from the working directory, if there is one."""
    load_dotenv(find_dotenv(usecwd=True), override=False)


def _resolve_path(path: str | Path | None) -> Path:
    if path is None:
        return Path(DEFAULT_CONFIG_PATH).expanduser()
    return Path(path).expanduser()


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return _ENV_REF_RE.sub(replacer, text)


def _keep_env_references(data, raw):
    """Put back ``${VAR}`` entries from ``raw`` whose expanded value is unchanged.

    Values changed since loading are written literally.
    """
    if isinstance(data, dict) and isinstance(raw, dict):
        return {
            key: _keep_env_references(value, raw.get(key))
            for key, value in data.items()
        }
    if isinstance(raw, str) and _ENV_REF_RE.search(raw):
        expanded = _interpolate_env_vars(raw)
        if expanded in (data, str(data)):
            return raw
    return data


def load_config(path: str | Path | None = None) -> RefinerConfig:
    """Load config from a YAML file, or defaults when the file is absent.

    ``${ENV}`` references in the file are expanded at load time.
    """
    path = _resolve_path(path)
    if not path.exists():
        return RefinerConfig()

    try:
        raw_text = path.read_text()
        data = yaml.safe_load(_interpolate_env_vars(raw_text))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return RefinerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    try:
        return RefinerConfig(**data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def save_config(config: RefinerConfig, path: str | Path | None = None) -> Path:
    """Save config to YAML file.

    ``${VAR}`` references already in the file are kept for values that were
    not changed since loading.
    """
    path = _resolve_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")
    if path.exists():
        try:
            raw = yaml.safe_load(path.read_text())
        except (OSError, yaml.YAMLError) as e:
            logger.debug("Not keeping env references from %s: %s", path, e)
        else:
            data = _keep_env_references(data, raw)
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))
    return path


def reset_config(path: str | Path | None = None) -> None:
    """Delete the stored config so defaults apply again."""
    _resolve_path(path).unlink(missing_ok=True)
