"""Prompt analyzer: orchestrates model calls, JSON recovery and rendering."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .config import RefinerConfig
from .exceptions import AnalysisError, RefinerError
from .models import OutputFormat, PromptFlavor, PromptType
from .providers.base import TextProvider
from .recovery import parse_response
from .templates import (
    GENERATIVE_ANALYSIS_PROMPT,
    REASONING_COMPACT_ANALYSIS_PROMPT,
    REASONING_DETAILED_ANALYSIS_PROMPT,
    GenerativePromptData,
    ReasoningCompactPromptData,
    ReasoningDetailedPromptData,
    build_generative_template,
    build_reasoning_template,
    build_regeneration_prompt,
)
from .validation import validate_prompt

logger = logging.getLogger("refiner")


@dataclass
class AnalysisResult:
    original_prompt: str
    structured_prompt: str
    prompt_type: PromptType
    output_format: OutputFormat
    flavor: PromptFlavor = PromptFlavor.DETAILED


def system_prompt_for(prompt_type: PromptType, flavor: PromptFlavor) -> str:
    """Analysis instructions for a prompt type and flavor."""
    if prompt_type is PromptType.GENERATIVE:
        return GENERATIVE_ANALYSIS_PROMPT
    if flavor is PromptFlavor.COMPACT:
        return REASONING_COMPACT_ANALYSIS_PROMPT
    return REASONING_DETAILED_ANALYSIS_PROMPT


def render_structured_prompt(
    record: Any,
    original_prompt: str,
    prompt_type: PromptType,
    output_format: OutputFormat,
    flavor: PromptFlavor,
) -> str:
    """Render a recovered record with the template for ``prompt_type``.

    Raises AnalysisError when the record is not an object or does not fit
    the template schema.
    """
    if not isinstance(record, dict):
        raise AnalysisError(
            f"Expected a JSON object from the model, got {type(record).__name__}"
        )
    fields = {**record, "originalPrompt": original_prompt}

    try:
        if prompt_type is PromptType.GENERATIVE:
            return build_generative_template(
                GenerativePromptData.model_validate(fields), output_format
            )
        if flavor is PromptFlavor.COMPACT:
            data = ReasoningCompactPromptData.model_validate(fields)
        else:
            data = ReasoningDetailedPromptData.model_validate(fields)
        return build_reasoning_template(data, output_format, flavor)
    except PydanticValidationError as e:
        raise AnalysisError(f"Model reply does not match the {prompt_type.value} schema: {e}") from e


class PromptAnalyzer:
    """Turns a raw prompt into a structured one through an injected provider."""

    def __init__(self, provider: TextProvider, config: RefinerConfig | None = None):
        self._provider = provider
        self._config = config or RefinerConfig()

    @property
    def provider_info(self) -> dict:
        return {
            "provider": self._provider.provider_name,
            "model": self._provider.model_name,
        }

    async def analyze_and_structure(
        self,
        original_prompt: str,
        prompt_type: PromptType | str,
        output_format: OutputFormat | str,
        flavor: PromptFlavor | str = PromptFlavor.DETAILED,
    ) -> AnalysisResult:
        """Ask the model to restructure ``original_prompt`` and render the result."""
        prompt_type = PromptType(prompt_type)
        output_format = OutputFormat(output_format)
        flavor = PromptFlavor(flavor)

        try:
            validate_prompt(original_prompt)
            response = await self._provider.complete(
                f'Original prompt to analyze and restructure:\n\n"{original_prompt}"',
                system_prompt=system_prompt_for(prompt_type, flavor),
                temperature=self._config.get_temperature(prompt_type),
            )
            structured = self._structure(
                response, original_prompt, prompt_type, output_format, flavor
            )
        except RefinerError as e:
            raise AnalysisError(f"Analysis failed: {e}") from e

        return AnalysisResult(
            original_prompt=original_prompt,
            structured_prompt=structured,
            prompt_type=prompt_type,
            output_format=output_format,
            flavor=flavor,
        )

    async def regenerate_with_context(
        self, result: AnalysisResult, additional_context: str
    ) -> AnalysisResult:
        """Regenerate ``result`` folding in the user's additional context."""
        prompt = build_regeneration_prompt(
            result.original_prompt, result.structured_prompt, additional_context
        )
        try:
            response = await self._provider.complete(
                prompt,
                system_prompt=system_prompt_for(result.prompt_type, result.flavor),
                temperature=self._config.get_temperature(result.prompt_type),
            )
            structured = self._structure(
                response,
                result.original_prompt,
                result.prompt_type,
                result.output_format,
                result.flavor,
            )
        except RefinerError as e:
            raise AnalysisError(f"Regeneration failed: {e}") from e

        return dataclasses.replace(result, structured_prompt=structured)

    def _structure(
        self,
        response: str,
        original_prompt: str,
        prompt_type: PromptType,
        output_format: OutputFormat,
        flavor: PromptFlavor,
    ) -> str:
        try:
            record = parse_response(response)
        except RefinerError:
            logger.debug("Unparseable model reply: %.500s", response)
            raise
        return render_structured_prompt(
            record, original_prompt, prompt_type, output_format, flavor
        )
