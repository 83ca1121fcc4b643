from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "AuditPro Callback Intelligence"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"

    llm_provider: Literal["gemini", "claude", "openai"] = "gemini"
    gemini_api_key: str = Field(
        default="", validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY")
    )
    gemini_model: str = "gemini-3-flash-preview"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    max_file_size_mb: int = 10
    allowed_extensions: str = ".txt,.md,.csv,.log"
    cors_origins: str = "http://localhost:5173"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
