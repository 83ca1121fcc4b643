from fastapi import APIRouter, Depends

from auditpro.config import settings
from auditpro.llm.base import LLMProvider
from auditpro.llm.factory import get_llm_provider

router = APIRouter()


@router.get("/health")
def health_check(llm: LLMProvider = Depends(get_llm_provider)) -> dict:
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "llm_provider": llm.provider_name,
        "llm_model": llm.model_name,
        "llm_configured": llm.is_configured,
    }
