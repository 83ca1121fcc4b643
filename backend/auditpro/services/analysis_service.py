from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from auditpro.llm.prompts.audit import AUDIT_SYSTEM_PROMPT, build_audit_user_prompt
from auditpro.utils.exceptions import (
    AnalysisError,
    ConfigurationError,
    EmptyResponseError,
    ProviderError,
)

if TYPE_CHECKING:
    from auditpro.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_ERROR = "Failed to analyze transcript."
EMPTY_RESPONSE_ERROR = "No analysis generated from the model."


async def analyze_transcript(content: str, llm: LLMProvider) -> str:
    """Run one audit completion for ``content`` and return the raw text.

    Makes a single attempt. Raises ``ConfigurationError`` before any network
    call when the provider has no credential, ``ProviderError`` when the
    provider call raises, and ``EmptyResponseError`` when it returns no text.
    """
    if not llm.is_configured:
        raise ConfigurationError(
            f"API key is not configured for provider '{llm.provider_name}'."
        )

    try:
        text = await llm.complete(AUDIT_SYSTEM_PROMPT, build_audit_user_prompt(content))
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("%s analysis call failed", llm.provider_name)
        raise ProviderError(str(e) or DEFAULT_PROVIDER_ERROR) from e

    if not text:
        raise EmptyResponseError(EMPTY_RESPONSE_ERROR)

    logger.info(
        "Analysis completed via %s/%s (%d chars)",
        llm.provider_name,
        llm.model_name,
        len(text),
    )
    return text
