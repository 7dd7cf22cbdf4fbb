"""Model catalog and the option enums shared across the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PromptType(str, Enum):
    GENERATIVE = "generative"
    REASONING = "reasoning"


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"


class OutputDestination(str, Enum):
    CLIPBOARD = "clipboard"
    FILE = "file"


class PromptFlavor(str, Enum):
    DETAILED = "detailed"
    COMPACT = "compact"


@dataclass(frozen=True)
class ModelSpec:
    id: str  # "openai:gpt-4o-mini"
    provider: str  # "openai" | "anthropic" | "google"
    api_model: str
    description: str
    prompt_type: PromptType
    streaming: bool = False
    thinking: bool = False


MODELS: dict[str, ModelSpec] = {
    spec.id: spec
    for spec in (
        ModelSpec(
            "openai:gpt-4o-mini",
            "openai",
            "gpt-4o-mini",
            "OpenAI gpt-4o-mini (reasoning-optimized)",
            PromptType.REASONING,
        ),
        ModelSpec(
            "openai:gpt-4.1-mini",
            "openai",
            "gpt-4.1-mini",
            "OpenAI gpt-4.1-mini (generative-leaning)",
            PromptType.GENERATIVE,
        ),
        ModelSpec(
            "openai:gpt-5-mini",
            "openai",
            "gpt-5-mini",
            "OpenAI gpt-5-mini (advanced, reasoning default)",
            PromptType.REASONING,
        ),
        ModelSpec(
            "claude:sonnet-4-0",
            "anthropic",
            "claude-sonnet-4-0",
            "Claude Sonnet 4 (streaming, extended thinking)",
            PromptType.REASONING,
            streaming=True,
            thinking=True,
        ),
        ModelSpec(
            "gemini:flash-lite",
            "google",
            "gemini-2.5-flash-lite",
            "Gemini 2.5 Flash-Lite (fast, low cost)",
            PromptType.GENERATIVE,
        ),
        ModelSpec(
            "gemini:flash",
            "google",
            "gemini-2.5-flash",
            "Gemini 2.5 Flash",
            PromptType.GENERATIVE,
        ),
    )
}

DEFAULT_MODEL = "openai:gpt-4o-mini"

# OpenAI models that reject an explicit temperature
_NO_TEMPERATURE_PREFIXES = ("gpt-5", "o1", "o3")


def get_model(model_id: str) -> ModelSpec:
    """Look up a catalog entry. Raises KeyError for unknown ids."""
    return MODELS[model_id]


def prompt_type_for_model(model_id: str) -> PromptType:
    """Infer the prompt type a model is best suited to."""
    spec = MODELS.get(model_id)
    if spec is None:
        return PromptType.REASONING
    return spec.prompt_type


def model_supports_streaming(model_id: str) -> bool:
    spec = MODELS.get(model_id)
    return bool(spec and spec.streaming)


def model_supports_thinking(model_id: str) -> bool:
    spec = MODELS.get(model_id)
    return bool(spec and spec.thinking)


def supports_temperature(api_model: str) -> bool:
    return not api_model.startswith(_NO_TEMPERATURE_PREFIXES)
