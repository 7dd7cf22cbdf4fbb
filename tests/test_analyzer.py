"""Tests for PromptAnalyzer with fake providers."""

from __future__ import annotations

import json

import pytest

from refiner.analyzer import (
    AnalysisResult,
    PromptAnalyzer,
    render_structured_prompt,
    system_prompt_for,
)
from refiner.config import RefinerConfig
from refiner.exceptions import (
    AnalysisError,
    JsonRecoveryError,
    ProviderAuthError,
    ValidationError,
)
from refiner.models import OutputFormat, PromptFlavor, PromptType
from refiner.providers.base import TextProvider
from refiner.templates import (
    GENERATIVE_ANALYSIS_PROMPT,
    REASONING_COMPACT_ANALYSIS_PROMPT,
    REASONING_DETAILED_ANALYSIS_PROMPT,
)

REASONING_REPLY = (
    "Here is the result:\n```json\n"
    '{"goal": "Build X", "warnings": ["w1", "w2"], "context": "ctx"}\n'
    "```\nLet me know if you need changes."
)


class ScriptedProvider(TextProvider):
    """Returns queued replies and records every call."""

    def __init__(self, *replies: str):
        self.replies = list(replies)
        self.calls: list[dict] = []

    async def complete(self, prompt, *, system_prompt="", temperature=None):
        self.calls.append(
            {"prompt": prompt, "system_prompt": system_prompt, "temperature": temperature}
        )
        return self.replies.pop(0)

    @property
    def provider_name(self) -> str:
        return "scripted"

    @property
    def model_name(self) -> str:
        return "scripted-v1"


class FailingProvider(ScriptedProvider):
    async def complete(self, prompt, *, system_prompt="", temperature=None):
        raise ProviderAuthError("Invalid OpenAI API key.")


class TestSystemPrompt:
    def test_selection(self):
        assert (
            system_prompt_for(PromptType.GENERATIVE, PromptFlavor.COMPACT)
            == GENERATIVE_ANALYSIS_PROMPT
        )
        assert (
            system_prompt_for(PromptType.REASONING, PromptFlavor.DETAILED)
            == REASONING_DETAILED_ANALYSIS_PROMPT
        )
        assert (
            system_prompt_for(PromptType.REASONING, PromptFlavor.COMPACT)
            == REASONING_COMPACT_ANALYSIS_PROMPT
        )


class TestRenderStructuredPrompt:
    def test_non_object_rejected(self):
        with pytest.raises(AnalysisError, match="JSON object"):
            render_structured_prompt(
                ["a"], "p", PromptType.REASONING, OutputFormat.MARKDOWN, PromptFlavor.DETAILED
            )

    def test_schema_mismatch_rejected(self):
        with pytest.raises(AnalysisError, match="schema"):
            render_structured_prompt(
                {"subcategories": "not an object"},
                "p",
                PromptType.GENERATIVE,
                OutputFormat.MARKDOWN,
                PromptFlavor.DETAILED,
            )


class TestAnalyzeAndStructure:
    @pytest.mark.asyncio
    async def test_reasoning_markdown(self):
        provider = ScriptedProvider(REASONING_REPLY)
        analyzer = PromptAnalyzer(provider, RefinerConfig())

        result = await analyzer.analyze_and_structure(
            "help me build a login system", "reasoning", "markdown"
        )

        assert isinstance(result, AnalysisResult)
        assert result.prompt_type is PromptType.REASONING
        assert result.structured_prompt.startswith("# Goal\nBuild X")
        assert "- w1\n- w2" in result.structured_prompt

        call = provider.calls[0]
        assert call["system_prompt"] == REASONING_DETAILED_ANALYSIS_PROMPT
        assert call["temperature"] == 0.2
        assert '"help me build a login system"' in call["prompt"]

    @pytest.mark.asyncio
    async def test_generative_json_uses_generative_temperature(self):
        reply = '{"roleObjective": "Builder", "reasoningSteps": ["a"]\n"context": "c"}'
        provider = ScriptedProvider(reply)
        analyzer = PromptAnalyzer(provider)

        result = await analyzer.analyze_and_structure(
            "write a short story generator", PromptType.GENERATIVE, OutputFormat.JSON
        )

        doc = json.loads(result.structured_prompt)
        assert doc["structure"]["role_and_objective"] == "Builder"
        assert doc["structure"]["context"] == "c"
        assert provider.calls[0]["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_compact_flavor(self):
        reply = '{"problemStatement": "Slow cache", "hardConstraints": ["No downtime"]}'
        provider = ScriptedProvider(reply)
        result = await PromptAnalyzer(provider).analyze_and_structure(
            "why is my cache slow?", "reasoning", "markdown", "compact"
        )
        assert result.flavor is PromptFlavor.COMPACT
        assert result.structured_prompt.startswith("# Problem Statement\nSlow cache")
        assert provider.calls[0]["system_prompt"] == REASONING_COMPACT_ANALYSIS_PROMPT

    @pytest.mark.asyncio
    async def test_invalid_prompt_never_calls_provider(self):
        provider = ScriptedProvider()
        with pytest.raises(AnalysisError) as excinfo:
            await PromptAnalyzer(provider).analyze_and_structure(
                "hi", "reasoning", "markdown"
            )
        assert isinstance(excinfo.value.__cause__, ValidationError)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_unrecoverable_reply(self):
        provider = ScriptedProvider("Sorry, I can't help with that.")
        with pytest.raises(AnalysisError, match="Analysis failed") as excinfo:
            await PromptAnalyzer(provider).analyze_and_structure(
                "build an API gateway", "reasoning", "markdown"
            )
        assert isinstance(excinfo.value.__cause__, JsonRecoveryError)

    @pytest.mark.asyncio
    async def test_provider_error_is_chained(self):
        with pytest.raises(AnalysisError) as excinfo:
            await PromptAnalyzer(FailingProvider()).analyze_and_structure(
                "build an API gateway", "reasoning", "markdown"
            )
        assert isinstance(excinfo.value.__cause__, ProviderAuthError)

    def test_provider_info(self):
        analyzer = PromptAnalyzer(ScriptedProvider())
        assert analyzer.provider_info == {"provider": "scripted", "model": "scripted-v1"}


class TestRegenerateWithContext:
    @pytest.mark.asyncio
    async def test_regenerate(self):
        provider = ScriptedProvider('{"goal": "Build Y"}')
        original = AnalysisResult(
            original_prompt="build something",
            structured_prompt="# Goal\nBuild X",
            prompt_type=PromptType.REASONING,
            output_format=OutputFormat.MARKDOWN,
        )

        updated = await PromptAnalyzer(provider).regenerate_with_context(
            original, "use Rust"
        )

        assert updated.structured_prompt.startswith("# Goal\nBuild Y")
        assert updated.original_prompt == "build something"
        assert original.structured_prompt == "# Goal\nBuild X"
        prompt = provider.calls[0]["prompt"]
        assert "use Rust" in prompt
        assert "# Goal\nBuild X" in prompt

    @pytest.mark.asyncio
    async def test_regenerate_failure(self):
        original = AnalysisResult(
            "build something", "# Goal", PromptType.REASONING, OutputFormat.MARKDOWN
        )
        with pytest.raises(AnalysisError, match="Regeneration failed"):
            await PromptAnalyzer(FailingProvider()).regenerate_with_context(
                original, "more"
            )
