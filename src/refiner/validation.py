"""Input validation for prompts, keys and CLI option values."""

from __future__ import annotations

import json
import re

from .exceptions import ValidationError
from .models import (
    MODELS,
    OutputDestination,
    OutputFormat,
    PromptFlavor,
    PromptType,
)

MIN_PROMPT_LENGTH = 5
MAX_PROMPT_LENGTH = 10000


def validate_prompt(prompt: str) -> None:
    if not prompt or not isinstance(prompt, str):
        raise ValidationError("Prompt must be a non-empty string")

    trimmed = prompt.strip()
    if not trimmed:
        raise ValidationError("Prompt cannot be empty or contain only whitespace")
    if len(trimmed) < MIN_PROMPT_LENGTH:
        raise ValidationError(
            f"Prompt must be at least {MIN_PROMPT_LENGTH} characters long"
        )
    if len(trimmed) > MAX_PROMPT_LENGTH:
        raise ValidationError("Prompt must be less than 10,000 characters")


def validate_api_key(api_key: str) -> None:
    """Basic OpenAI key format check."""
    if not api_key or not isinstance(api_key, str):
        raise ValidationError("API key must be a non-empty string")

    trimmed = api_key.strip()
    if not trimmed:
        raise ValidationError("API key cannot be empty or contain only whitespace")
    if not trimmed.startswith("sk-"):
        raise ValidationError('OpenAI API key must start with "sk-"')
    if len(trimmed) < 20:
        raise ValidationError("API key appears to be too short")


def validate_model(model: str) -> str:
    if model not in MODELS:
        raise ValidationError(
            f"Invalid model type. Must be one of: {', '.join(MODELS)}"
        )
    return model


def _validate_choice(value: str, enum_cls, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label}. Must be one of: {valid}") from None


def validate_prompt_type(value: str) -> PromptType:
    return _validate_choice(value, PromptType, "prompt type")


def validate_output_format(value: str) -> OutputFormat:
    return _validate_choice(value, OutputFormat, "output format")


def validate_output_destination(value: str) -> OutputDestination:
    return _validate_choice(value, OutputDestination, "output destination")


def validate_flavor(value: str) -> PromptFlavor:
    return _validate_choice(value, PromptFlavor, "prompt flavor")


def sanitize_input(text: str) -> str:
    """Collapse newlines, tabs and runs of spaces into single spaces."""
    return re.sub(r"\s+", " ", text.strip())


def is_valid_json(text: str) -> bool:
    try:
        json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return False
    return True
