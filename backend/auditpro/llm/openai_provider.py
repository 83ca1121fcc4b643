from __future__ import annotations

from openai import AsyncOpenAI

from auditpro.config import settings
from auditpro.llm.base import SAMPLING_TEMPERATURE, SAMPLING_TOP_P, LLMProvider


class OpenAIProvider(LLMProvider):
    def __init__(self) -> None:
        self._model = settings.openai_model

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def api_key(self) -> str:
        return settings.openai_api_key

    def _build_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key)

    async def _close_client(self, client: AsyncOpenAI) -> None:
        await client.close()

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        client = await self._get_client()
        response = await client.chat.completions.create(
            model=self._model,
            temperature=SAMPLING_TEMPERATURE,
            top_p=SAMPLING_TOP_P,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return response.choices[0].message.content or ""
