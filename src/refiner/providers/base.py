"""Text provider abstraction. All LLM providers implement this interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..exceptions import ProviderAuthError, ProviderError, ProviderRateLimitError

_AUTH_MARKERS = (
    "invalid_api_key",
    "authentication",
    "unauthorized",
    "api_key_invalid",
    "api key not valid",
    "401",
    "403",
)
_RATE_MARKERS = (
    "rate_limit",
    "rate limit",
    "insufficient_quota",
    "quota",
    "resource_exhausted",
    "429",
)


class TextProvider(ABC):
    """Abstract interface for text-completion LLM providers."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        *,
        system_prompt: str = "",
        temperature: float | None = None,
    ) -> str:
        """Send a prompt (plus optional system instructions) and get the reply text."""
        ...

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @property
    @abstractmethod
    def model_name(self) -> str: ...


def translate_error(error: Exception, provider_label: str, model: str) -> ProviderError:
    """Map an SDK exception onto the ProviderError family by its message."""
    msg = str(error)
    lowered = msg.lower()
    status = getattr(error, "status_code", None)

    if status in (401, 403) or any(m in lowered for m in _AUTH_MARKERS):
        return ProviderAuthError(
            f"Invalid {provider_label} API key. Please check your {provider_label} API key."
        )
    if status == 429 or any(m in lowered for m in _RATE_MARKERS):
        if "quota" in lowered:
            return ProviderRateLimitError(
                f"API quota exceeded. Please check your {provider_label} billing and usage limits."
            )
        return ProviderRateLimitError(
            "Rate limit exceeded. Please wait a moment and try again."
        )
    if status == 404 or "model_not_found" in lowered or "not_found" in lowered:
        return ProviderError(f"Model {model} not found or not accessible with your API key.")
    if "overloaded" in lowered or status == 529:
        return ProviderError(
            f"{provider_label} API is currently overloaded. Please try again in a moment."
        )
    if "safety" in lowered:
        return ProviderError(
            "Content was blocked by safety filters. Please try rephrasing your prompt."
        )
    return ProviderError(f"{provider_label} API Error: {msg}")
