"""Google Gemini text provider."""

from __future__ import annotations

from ..exceptions import ProviderError
from .base import TextProvider, translate_error


class GoogleProvider(TextProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_output_tokens: int = 16000,
    ):
        try:
            from google import genai
        except ImportError:
            raise ImportError(
                "Google GenAI SDK not installed. Run: pip install refiner-cli[google]"
            )
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._max_output_tokens = max_output_tokens

    async def complete(
        self,
        prompt: str,
        *,
        system_prompt: str = "",
        temperature: float | None = None,
    ) -> str:
        from google.genai import types

        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=self._max_output_tokens,
            system_instruction=system_prompt or None,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise translate_error(e, "Gemini", self._model) from e

        text = response.text
        if not text:
            raise ProviderError("No response received from Gemini model")
        return text

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def model_name(self) -> str:
        return self._model
