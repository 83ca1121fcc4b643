from __future__ import annotations

from auditpro.config import settings
from auditpro.llm.base import LLMProvider

_provider_instance: LLMProvider | None = None


def get_llm_provider() -> LLMProvider:
    global _provider_instance
    if _provider_instance is None:
        if settings.llm_provider == "gemini":
            from auditpro.llm.gemini_provider import GeminiProvider

            _provider_instance = GeminiProvider()
        elif settings.llm_provider == "claude":
            from auditpro.llm.claude_provider import ClaudeProvider

            _provider_instance = ClaudeProvider()
        elif settings.llm_provider == "openai":
            from auditpro.llm.openai_provider import OpenAIProvider

            _provider_instance = OpenAIProvider()
        else:
            raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")
    return _provider_instance


async def close_llm_provider() -> None:
    if _provider_instance is not None:
        await _provider_instance.aclose()
