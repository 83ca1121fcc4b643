from datetime import datetime, timezone
from enum import StrEnum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field


class AuditStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class ActiveView(StrEnum):
    INPUT = "input"
    RESULTS = "results"


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TranscriptEntry(BaseModel):
    """One transcript tracked through its audit lifecycle.

    Entries are immutable; a status change produces a copy via
    ``model_copy(update=...)``. ``result`` is only set when completed and
    ``error`` only when the analysis failed.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    content: str
    upload_method: Literal["paste", "file"] = "paste"
    status: AuditStatus = AuditStatus.PENDING
    result: str | None = None
    error: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}

    def as_processing(self) -> "TranscriptEntry":
        return self.model_copy(
            update={"status": AuditStatus.PROCESSING, "result": None, "error": None}
        )

    def as_completed(self, result: str) -> "TranscriptEntry":
        return self.model_copy(
            update={"status": AuditStatus.COMPLETED, "result": result, "error": None}
        )

    def as_failed(self, message: str) -> "TranscriptEntry":
        return self.model_copy(
            update={"status": AuditStatus.ERROR, "result": None, "error": message}
        )
