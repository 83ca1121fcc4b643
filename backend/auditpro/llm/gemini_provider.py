from __future__ import annotations

from google import genai
from google.genai import types

from auditpro.config import settings
from auditpro.llm.base import (
    SAMPLING_TEMPERATURE,
    SAMPLING_TOP_K,
    SAMPLING_TOP_P,
    LLMProvider,
)


class GeminiProvider(LLMProvider):
    def __init__(self) -> None:
        self._model = settings.gemini_model

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def api_key(self) -> str:
        return settings.gemini_api_key

    def _build_client(self, api_key: str) -> genai.Client:
        return genai.Client(api_key=api_key)

    async def _close_client(self, client: genai.Client) -> None:
        await client.aio.aclose()

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        client = await self._get_client()
        response = await client.aio.models.generate_content(
            model=self._model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=SAMPLING_TEMPERATURE,
                top_p=SAMPLING_TOP_P,
                top_k=SAMPLING_TOP_K,
            ),
        )
        return response.text or ""
