"""Anthropic (Claude) text provider with optional streaming and extended thinking."""

from __future__ import annotations

from typing import Any, Callable

from ..exceptions import ProviderError
from .base import TextProvider, translate_error

# The API rejects thinking budgets below this
MIN_THINKING_BUDGET = 1024


class AnthropicProvider(TextProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-0",
        max_tokens: int = 20000,
        stream: bool = False,
        thinking_budget_tokens: int = 0,
        on_text: Callable[[str], None] | None = None,
    ):
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "Anthropic SDK not installed. Run: pip install refiner-cli[anthropic]"
            )
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens
        self._stream = stream
        self._thinking_budget = thinking_budget_tokens
        self._on_text = on_text

    def _build_params(
        self, prompt: str, system_prompt: str, temperature: float | None
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            params["system"] = system_prompt

        if self._thinking_budget > 0:
            budget = self._thinking_budget
            # max_tokens must exceed the thinking budget
            if budget >= self._max_tokens:
                budget = int(self._max_tokens * 0.7)
            params["thinking"] = {
                "type": "enabled",
                "budget_tokens": max(budget, MIN_THINKING_BUDGET),
            }
            # Extended thinking only runs at temperature 1
            params["temperature"] = 1
        elif temperature is not None:
            params["temperature"] = temperature
        return params

    async def complete(
        self,
        prompt: str,
        *,
        system_prompt: str = "",
        temperature: float | None = None,
    ) -> str:
        params = self._build_params(prompt, system_prompt, temperature)
        try:
            if self._stream:
                return await self._stream_response(params)
            response = await self._client.messages.create(**params)
        except ProviderError:
            raise
        except Exception as e:
            raise translate_error(e, "Claude", self._model) from e
        return self._extract_text(response)

    async def _stream_response(self, params: dict[str, Any]) -> str:
        chunks: list[str] = []
        async with self._client.messages.stream(**params) as stream:
            async for text in stream.text_stream:
                chunks.append(text)
                if self._on_text is not None:
                    self._on_text(text)
            message = await stream.get_final_message()

        if chunks:
            return "".join(chunks)
        return self._extract_text(message)

    @staticmethod
    def _extract_text(message: Any) -> str:
        """Return the first text block; thinking blocks are skipped."""
        content = getattr(message, "content", None)
        if not content:
            raise ProviderError("No content received from Claude")
        for block in content:
            if getattr(block, "type", None) == "text" and getattr(block, "text", ""):
                return block.text
        raise ProviderError("No text content found in Claude response")

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model
