from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Fixed sampling parameters for every audit completion.
SAMPLING_TEMPERATURE = 0.2
SAMPLING_TOP_P = 0.8
SAMPLING_TOP_K = 40


class LLMProvider(ABC):
    _client: Any = None
    _client_key: str | None = None

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> str: ...

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @property
    @abstractmethod
    def model_name(self) -> str: ...

    @property
    @abstractmethod
    def api_key(self) -> str:
        """Credential read from settings at call time; empty when unset."""

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _build_client(self, api_key: str) -> Any:
        raise NotImplementedError

    async def _close_client(self, client: Any) -> None:
        raise NotImplementedError

    async def _get_client(self) -> Any:
        """Return the SDK client for the current key, replacing it on rotation."""
        api_key = self.api_key
        if self._client is None or self._client_key != api_key:
            await self.aclose()
            self._client = self._build_client(api_key)
            self._client_key = api_key
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client, self._client_key = self._client, None, None
            await self._close_client(client)
