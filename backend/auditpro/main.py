from __future__ import annotations

import logging
from collections.abc import AsyncGenerator  # noqa: TC003
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auditpro.config import settings
from auditpro.llm.factory import close_llm_provider
from auditpro.routers import audits, health, queue, transcripts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "%s starting with LLM provider '%s'", settings.app_name, settings.llm_provider
    )
    yield
    await close_llm_provider()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(transcripts.router, prefix=settings.api_prefix, tags=["transcripts"])
app.include_router(audits.router, prefix=settings.api_prefix, tags=["audits"])
app.include_router(queue.router, prefix=settings.api_prefix, tags=["queue"])
