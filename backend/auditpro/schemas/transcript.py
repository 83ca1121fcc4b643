from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from auditpro.models.transcript import ActiveView, AuditStatus


class TranscriptPaste(BaseModel):
    text: str


class TranscriptResponse(BaseModel):
    id: str
    name: str
    content: str
    upload_method: str
    status: AuditStatus
    result: str | None
    error: str | None
    timestamp: datetime

    model_config = {"from_attributes": True}


class TranscriptListResponse(BaseModel):
    id: str
    name: str
    upload_method: str
    status: AuditStatus
    error: str | None
    timestamp: datetime

    model_config = {"from_attributes": True}


class AuditSummaryResponse(BaseModel):
    id: str
    name: str
    result: str
    timestamp: datetime

    model_config = {"from_attributes": True}


class BatchResponse(BaseModel):
    queued_ids: list[str]
    message: str


class QueueSnapshotResponse(BaseModel):
    entries: list[TranscriptListResponse]
    selected_id: str | None
    active_view: ActiveView
    batch_running: bool
    completed_count: int

    model_config = {"from_attributes": True}


class SelectionUpdate(BaseModel):
    transcript_id: str | None = None


class ViewUpdate(BaseModel):
    view: ActiveView
