from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from auditpro.schemas.report import AuditReport
from auditpro.schemas.transcript import AuditSummaryResponse
from auditpro.services import report_service, transcript_service
from auditpro.services.queue_store import QueueStore, get_queue_store
from auditpro.utils.exceptions import (
    TranscriptNotCompletedError,
    TranscriptNotFoundError,
)

router = APIRouter(prefix="/audits")


@router.get("", response_model=list[AuditSummaryResponse])
async def list_audits(
    q: str = "", store: QueueStore = Depends(get_queue_store)
) -> list[AuditSummaryResponse]:
    return [AuditSummaryResponse.model_validate(e) for e in store.completed_results(q)]


@router.get("/{transcript_id}/report", response_model=AuditReport)
async def get_audit_report(
    transcript_id: str,
    store: QueueStore = Depends(get_queue_store),
) -> AuditReport:
    try:
        entry = transcript_service.get_transcript(store, transcript_id)
        return report_service.build_report(entry)
    except TranscriptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except TranscriptNotCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
