"""Tolerant JSON recovery from free-form LLM responses."""

from .extractor import extract
from .pipeline import SNIPPET_LIMIT, parse_response, strip_code_fences, truncated_object
from .repairer import repair

__all__ = [
    "SNIPPET_LIMIT",
    "extract",
    "repair",
    "parse_response",
    "strip_code_fences",
    "truncated_object",
]
