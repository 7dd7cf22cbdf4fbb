"""LLM providers: OpenAI, Anthropic Claude, Google Gemini."""

from .base import TextProvider, translate_error
from .factory import create_provider

__all__ = [
    "TextProvider",
    "create_provider",
    "translate_error",
]
