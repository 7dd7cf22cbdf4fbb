"""Prompt templates: renderers and the instruction text sent to models."""

from .generative import (
    GENERATIVE_ANALYSIS_PROMPT,
    GenerativePromptData,
    build_generative_template,
)
from .reasoning import (
    REASONING_ANALYSIS_PROMPT,
    REASONING_COMPACT_ANALYSIS_PROMPT,
    REASONING_DETAILED_ANALYSIS_PROMPT,
    ReasoningCompactPromptData,
    ReasoningDetailedPromptData,
    build_reasoning_template,
)
from .regeneration import build_regeneration_prompt

__all__ = [
    "GENERATIVE_ANALYSIS_PROMPT",
    "REASONING_ANALYSIS_PROMPT",
    "REASONING_COMPACT_ANALYSIS_PROMPT",
    "REASONING_DETAILED_ANALYSIS_PROMPT",
    "GenerativePromptData",
    "ReasoningCompactPromptData",
    "ReasoningDetailedPromptData",
    "build_generative_template",
    "build_reasoning_template",
    "build_regeneration_prompt",
]
