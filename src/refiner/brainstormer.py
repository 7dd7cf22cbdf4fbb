"""Brainstorm interview that turns a rough idea into a rich raw prompt via Q&A."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import RefinerConfig
from .exceptions import JsonRecoveryError
from .models import PromptType
from .providers.base import TextProvider
from .recovery import parse_response
from .templates.brainstorm import (
    BRAINSTORM_QUESTIONS_PROMPT,
    BRAINSTORM_SYNTHESIS_PROMPT,
)

logger = logging.getLogger("refiner")

FALLBACK_QUESTIONS = [
    "Who is the primary user and what core job are they trying to accomplish?",
    "What are the must-have outcomes and success criteria?",
    "What constraints or non-goals should we respect?",
]


@dataclass
class QAItem:
    question: str
    answer: str


@dataclass
class BrainstormQuestions:
    questions: list[str]
    should_continue: bool
    reason: str | None = None


def format_transcript(
    idea: str, transcript: list[QAItem], prompt_type: PromptType | str, empty: str
) -> str:
    """Render the idea and Q&A so far as the user message for the model."""
    lines = "\n".join(
        f"{i}. Q: {qa.question}\n   A: {qa.answer}" for i, qa in enumerate(transcript, 1)
    )
    return (
        f"INITIAL_IDEA:\n{idea}\n\n"
        f"TRANSCRIPT:\n{lines or empty}\n\n"
        f"PROMPT_TYPE: {PromptType(prompt_type).value}"
    )


class Brainstormer:
    """Runs interview rounds and the final synthesis against an injected provider."""

    def __init__(self, provider: TextProvider, config: RefinerConfig | None = None):
        self._provider = provider
        self._config = config or RefinerConfig()

    async def generate_next_questions(
        self,
        idea: str,
        transcript: list[QAItem],
        prompt_type: PromptType | str,
    ) -> BrainstormQuestions:
        """Ask the model for the next round of clarifying questions.

        An unparseable reply falls back to a generic set so the interview
        can still make progress.
        """
        response = await self._provider.complete(
            format_transcript(idea, transcript, prompt_type, "(none yet)"),
            system_prompt=BRAINSTORM_QUESTIONS_PROMPT,
            # Interviewing is analytical whatever the target prompt type
            temperature=self._config.get_temperature(PromptType.REASONING),
        )

        try:
            parsed = parse_response(response)
        except JsonRecoveryError as e:
            logger.warning("Could not parse brainstorm questions: %s", e)
            return BrainstormQuestions(list(FALLBACK_QUESTIONS), should_continue=True)

        if not isinstance(parsed, dict):
            return BrainstormQuestions(list(FALLBACK_QUESTIONS), should_continue=True)

        raw_questions = parsed.get("questions")
        questions = (
            [str(q).strip() for q in raw_questions if q and str(q).strip()]
            if isinstance(raw_questions, list)
            else []
        )
        reason = parsed.get("reason")
        return BrainstormQuestions(
            questions=questions,
            should_continue=bool(parsed.get("shouldContinue")) and bool(questions),
            reason=reason if isinstance(reason, str) else None,
        )

    async def synthesize_raw_prompt(
        self,
        idea: str,
        transcript: list[QAItem],
        prompt_type: PromptType | str,
    ) -> str:
        """Condense the idea and answers into one raw prompt."""
        response = await self._provider.complete(
            format_transcript(idea, transcript, prompt_type, "(none)"),
            system_prompt=BRAINSTORM_SYNTHESIS_PROMPT,
            temperature=self._config.get_temperature(PromptType.REASONING),
        )

        try:
            parsed = parse_response(response)
        except JsonRecoveryError as e:
            logger.warning("Could not parse synthesized prompt: %s", e)
            parsed = None

        raw_prompt = parsed.get("rawPrompt") if isinstance(parsed, dict) else None
        if isinstance(raw_prompt, str) and raw_prompt.strip():
            return raw_prompt.strip()

        details = "\n".join(f"- {qa.question} => {qa.answer}" for qa in transcript)
        return f"Goal and Idea:\n{idea}\n\nKey Details from Q&A:\n{details}"
