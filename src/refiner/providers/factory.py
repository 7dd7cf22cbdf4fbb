"""Provider factory that builds the client for a catalog model id."""

from __future__ import annotations

import logging
from typing import Callable

from ..config import RefinerConfig
from ..exceptions import ConfigError, ValidationError
from ..models import MODELS, model_supports_streaming, model_supports_thinking
from ..validation import validate_api_key
from .base import TextProvider

logger = logging.getLogger("refiner")

_MISSING_KEY_HINTS = {
    "openai": "OpenAI API key not found. Set OPENAI_API_KEY in your environment or run \"refiner config\" to save your API key.",
    "anthropic": "Claude API key not found. Set CLAUDE_API_KEY in your environment or run \"refiner config\" to save your Claude API key.",
    "google": "Gemini API key not found. Set GEMINI_API_KEY in your environment or run \"refiner config\" to save your Gemini API key.",
}


def create_provider(
    model_id: str,
    config: RefinerConfig,
    on_text: Callable[[str], None] | None = None,
) -> TextProvider:
    """Create the provider for ``model_id`` using keys and settings from ``config``.

    ``on_text`` receives streamed text deltas for models that stream.
    """
    spec = MODELS.get(model_id)
    if spec is None:
        raise ValidationError(f"Unsupported model type: {model_id}")

    api_key = config.get_api_key(spec.provider)
    if not api_key:
        raise ConfigError(_MISSING_KEY_HINTS[spec.provider])

    logger.debug("Creating %s provider for %s", spec.provider, spec.api_model)

    if spec.provider == "openai":
        try:
            validate_api_key(api_key)
        except ValidationError as e:
            raise ConfigError(f"Invalid API key: {e}") from e
        from .openai_compat import OpenAIProvider

        return OpenAIProvider(
            api_key=api_key,
            model=spec.api_model,
            max_output_tokens=config.max_output_tokens,
        )
    elif spec.provider == "anthropic":
        from .anthropic import AnthropicProvider

        streaming = config.streaming
        thinking_budget = (
            streaming.thinking_budget_tokens
            if streaming.show_thinking and model_supports_thinking(model_id)
            else 0
        )
        return AnthropicProvider(
            api_key=api_key,
            model=spec.api_model,
            max_tokens=max(config.max_output_tokens, 20000),
            stream=streaming.enabled and model_supports_streaming(model_id),
            thinking_budget_tokens=thinking_budget,
            on_text=on_text,
        )
    elif spec.provider == "google":
        from .google import GoogleProvider

        return GoogleProvider(
            api_key=api_key,
            model=spec.api_model,
            max_output_tokens=config.max_output_tokens,
        )
    raise ValidationError(f"Unsupported provider: {spec.provider}")
