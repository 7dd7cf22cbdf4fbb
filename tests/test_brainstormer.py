"""Tests for the brainstorm interview."""

from __future__ import annotations

import pytest

from refiner.brainstormer import (
    FALLBACK_QUESTIONS,
    Brainstormer,
    QAItem,
    format_transcript,
)
from refiner.config import RefinerConfig
from refiner.models import PromptType
from refiner.providers.base import TextProvider
from refiner.templates.brainstorm import (
    BRAINSTORM_QUESTIONS_PROMPT,
    BRAINSTORM_SYNTHESIS_PROMPT,
)


class ReplyProvider(TextProvider):
    def __init__(self, reply: str):
        self.reply = reply
        self.calls: list[dict] = []

    async def complete(self, prompt, *, system_prompt="", temperature=None):
        self.calls.append(
            {"prompt": prompt, "system_prompt": system_prompt, "temperature": temperature}
        )
        return self.reply

    @property
    def provider_name(self) -> str:
        return "reply"

    @property
    def model_name(self) -> str:
        return "reply-v1"


TRANSCRIPT = [QAItem("Who uses it?", "Freelancers"), QAItem("Platform?", "Web")]


class TestFormatTranscript:
    def test_with_items(self):
        text = format_transcript("expense tracker", TRANSCRIPT, "generative", "(none)")
        assert text.startswith("INITIAL_IDEA:\nexpense tracker")
        assert "1. Q: Who uses it?\n   A: Freelancers" in text
        assert "2. Q: Platform?\n   A: Web" in text
        assert text.endswith("PROMPT_TYPE: generative")

    def test_empty(self):
        text = format_transcript("idea", [], PromptType.REASONING, "(none yet)")
        assert "TRANSCRIPT:\n(none yet)" in text


class TestGenerateNextQuestions:
    @pytest.mark.asyncio
    async def test_parses_questions(self):
        provider = ReplyProvider(
            '```json\n{"questions": ["Budget?", "  ", "Timeline?"], '
            '"shouldContinue": true, "reason": "gaps"}\n```'
        )
        result = await Brainstormer(provider, RefinerConfig()).generate_next_questions(
            "expense tracker", TRANSCRIPT, "generative"
        )
        assert result.questions == ["Budget?", "Timeline?"]
        assert result.should_continue is True
        assert result.reason == "gaps"
        assert provider.calls[0]["system_prompt"] == BRAINSTORM_QUESTIONS_PROMPT
        assert provider.calls[0]["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_stop_signal(self):
        provider = ReplyProvider('{"questions": [], "shouldContinue": false}')
        result = await Brainstormer(provider).generate_next_questions(
            "idea", TRANSCRIPT, "reasoning"
        )
        assert result.questions == []
        assert result.should_continue is False
        assert result.reason is None

    @pytest.mark.asyncio
    async def test_unparseable_falls_back(self):
        provider = ReplyProvider("What a great idea! Tell me more.")
        result = await Brainstormer(provider).generate_next_questions(
            "idea", [], "generative"
        )
        assert result.questions == FALLBACK_QUESTIONS
        assert result.should_continue is True

    @pytest.mark.asyncio
    async def test_non_object_falls_back(self):
        provider = ReplyProvider('["Q1?", "Q2?"]')
        result = await Brainstormer(provider).generate_next_questions(
            "idea", [], "generative"
        )
        assert result.questions == FALLBACK_QUESTIONS


class TestSynthesizeRawPrompt:
    @pytest.mark.asyncio
    async def test_uses_raw_prompt(self):
        provider = ReplyProvider('{"rawPrompt": "  Build a web expense tracker.  "}')
        raw = await Brainstormer(provider).synthesize_raw_prompt(
            "expense tracker", TRANSCRIPT, "generative"
        )
        assert raw == "Build a web expense tracker."
        assert provider.calls[0]["system_prompt"] == BRAINSTORM_SYNTHESIS_PROMPT

    @pytest.mark.asyncio
    async def test_fallback_summary(self):
        provider = ReplyProvider("no json here")
        raw = await Brainstormer(provider).synthesize_raw_prompt(
            "expense tracker", TRANSCRIPT, "generative"
        )
        assert raw == (
            "Goal and Idea:\nexpense tracker\n\n"
            "Key Details from Q&A:\n"
            "- Who uses it? => Freelancers\n"
            "- Platform? => Web"
        )

    @pytest.mark.asyncio
    async def test_blank_raw_prompt_falls_back(self):
        provider = ReplyProvider('{"rawPrompt": "   "}')
        raw = await Brainstormer(provider).synthesize_raw_prompt("idea", [], "reasoning")
        assert raw.startswith("Goal and Idea:\nidea")
