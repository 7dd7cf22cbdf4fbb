"""Custom exception hierarchy for refiner.

All refiner exceptions inherit from RefinerError, allowing callers
to catch broad or specific errors:

    try:
        record = parse_response(text)
    except JsonRecoveryError as e:
        print(f"Model reply was not JSON: {e}")
    except RefinerError as e:
        print(f"refiner error: {e}")
"""

from __future__ import annotations


class RefinerError(Exception):
    """Base exception for all refiner errors."""


class JsonRecoveryError(RefinerError):
    """Raised when no JSON value can be recovered from a model response.

    Carries the last stage attempted, a bounded snippet of the text that
    failed to parse, and the underlying parser message.
    """

    def __init__(self, stage: str, snippet: str, parser_error: str):
        self.stage = stage
        self.snippet = snippet
        self.parser_error = parser_error
        super().__init__(
            f"JSON parsing failed at stage '{stage}': {parser_error} "
            f"(text: {snippet!r})"
        )


class ValidationError(RefinerError, ValueError):
    """Raised when a prompt, API key, or option value is invalid."""


class ConfigError(RefinerError):
    """Raised when configuration is invalid or missing."""


class ProviderError(RefinerError):
    """Raised when an LLM provider call fails."""


class ProviderAuthError(ProviderError):
    """Raised when provider authentication fails (invalid API key)."""


class ProviderRateLimitError(ProviderError):
    """Raised when a provider rate-limits the request or the quota is exhausted."""


class AnalysisError(RefinerError):
    """Raised when prompt analysis or regeneration fails."""


class OutputError(RefinerError):
    """Raised when the structured prompt cannot be copied or written."""
