from __future__ import annotations

import anthropic

from auditpro.config import settings
from auditpro.llm.base import SAMPLING_TEMPERATURE, SAMPLING_TOP_K, LLMProvider


class ClaudeProvider(LLMProvider):
    def __init__(self) -> None:
        self._model = settings.anthropic_model

    @property
    def provider_name(self) -> str:
        return "claude"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def api_key(self) -> str:
        return settings.anthropic_api_key

    def _build_client(self, api_key: str) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(api_key=api_key)

    async def _close_client(self, client: anthropic.AsyncAnthropic) -> None:
        await client.close()

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        client = await self._get_client()
        # top_p is omitted: the Messages API rejects it alongside temperature.
        response = await client.messages.create(
            model=self._model,
            max_tokens=8096,
            temperature=SAMPLING_TEMPERATURE,
            top_k=SAMPLING_TOP_K,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return "".join(
            block.text for block in response.content if block.type == "text"
        )
