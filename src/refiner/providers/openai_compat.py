"""OpenAI text provider (Responses API)."""

from __future__ import annotations

from typing import Any

from ..exceptions import ProviderError
from ..models import supports_temperature
from .base import TextProvider, translate_error


class OpenAIProvider(TextProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_output_tokens: int = 16000,
    ):
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ImportError(
                "OpenAI SDK not installed. Run: pip install refiner-cli[openai]"
            )
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model
        self._max_output_tokens = max_output_tokens

    async def complete(
        self,
        prompt: str,
        *,
        system_prompt: str = "",
        temperature: float | None = None,
    ) -> str:
        params: dict[str, Any] = {
            "model": self._model,
            "input": prompt,
            "max_output_tokens": self._max_output_tokens,
        }
        if system_prompt:
            params["instructions"] = system_prompt
        # gpt-5 and the o-series reject an explicit temperature
        if temperature is not None and supports_temperature(self._model):
            params["temperature"] = temperature

        try:
            response = await self._client.responses.create(**params)
        except Exception as e:
            raise translate_error(e, "OpenAI", self._model) from e
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Pull the reply text out of a Responses API result.

        Prefers the SDK's ``output_text`` shortcut, then walks ``output``.
        """
        output_text = getattr(response, "output_text", None)
        if isinstance(output_text, str) and output_text.strip():
            return output_text.strip()

        collected: list[str] = []
        for part in getattr(response, "output", None) or []:
            part_type = getattr(part, "type", None)
            if part_type == "output_text" and isinstance(getattr(part, "text", None), str):
                collected.append(part.text)
            elif part_type == "message":
                for item in getattr(part, "content", None) or []:
                    if getattr(item, "type", None) in ("output_text", "text") and isinstance(
                        getattr(item, "text", None), str
                    ):
                        collected.append(item.text)
        if collected:
            return "\n".join(collected).strip()

        raise ProviderError("Invalid response format from AI model")

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
