"""Refiner: turn rough prompts into structured, AI-ready prompts."""

__version__ = "1.0.0"

from .exceptions import (
    AnalysisError,
    ConfigError,
    JsonRecoveryError,
    OutputError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    RefinerError,
    ValidationError,
)
from .recovery import parse_response

__all__ = [
    "__version__",
    "RefinerError",
    "JsonRecoveryError",
    "ValidationError",
    "ConfigError",
    "ProviderError",
    "ProviderAuthError",
    "ProviderRateLimitError",
    "AnalysisError",
    "OutputError",
    "parse_response",
]
