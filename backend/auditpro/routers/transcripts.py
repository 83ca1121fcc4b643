from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, UploadFile

from auditpro.schemas.transcript import (
    BatchResponse,
    TranscriptListResponse,
    TranscriptPaste,
    TranscriptResponse,
)
from auditpro.services import transcript_service
from auditpro.services.queue_store import QueueStore, get_queue_store
from auditpro.utils.exceptions import BatchInProgressError, TranscriptNotFoundError

router = APIRouter(prefix="/transcripts")


@router.post("/upload", response_model=list[TranscriptResponse])
async def upload_transcripts(
    files: list[UploadFile], store: QueueStore = Depends(get_queue_store)
) -> list[TranscriptResponse]:
    try:
        entries = await transcript_service.create_from_files(store, files)
        return [TranscriptResponse.model_validate(e) for e in entries]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/paste", response_model=TranscriptResponse)
async def paste_transcript(
    body: TranscriptPaste, store: QueueStore = Depends(get_queue_store)
) -> TranscriptResponse:
    try:
        entry = transcript_service.create_from_text(store, body.text)
        return TranscriptResponse.model_validate(entry)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("", response_model=list[TranscriptListResponse])
async def list_transcripts(
    store: QueueStore = Depends(get_queue_store),
) -> list[TranscriptListResponse]:
    return [TranscriptListResponse.model_validate(e) for e in store.entries]


@router.delete("")
async def clear_transcripts(store: QueueStore = Depends(get_queue_store)) -> dict:
    removed = store.clear_all()
    return {"message": "All transcripts cleared", "removed": removed}


@router.post("/process", response_model=BatchResponse, status_code=202)
async def process_all_pending(
    background_tasks: BackgroundTasks,
    store: QueueStore = Depends(get_queue_store),
) -> BatchResponse:
    try:
        queued_ids = store.start_batch()
    except BatchInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    background_tasks.add_task(store.run_batch, queued_ids)
    return BatchResponse(
        queued_ids=queued_ids,
        message=f"Processing {len(queued_ids)} pending transcripts",
    )


@router.get("/{transcript_id}", response_model=TranscriptResponse)
async def get_transcript(
    transcript_id: str, store: QueueStore = Depends(get_queue_store)
) -> TranscriptResponse:
    try:
        entry = transcript_service.get_transcript(store, transcript_id)
        return TranscriptResponse.model_validate(entry)
    except TranscriptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{transcript_id}")
async def delete_transcript(
    transcript_id: str, store: QueueStore = Depends(get_queue_store)
) -> dict:
    try:
        transcript_service.delete_transcript(store, transcript_id)
        return {"message": "Transcript deleted"}
    except TranscriptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("/{transcript_id}/process", response_model=TranscriptResponse)
async def process_transcript(
    transcript_id: str, store: QueueStore = Depends(get_queue_store)
) -> TranscriptResponse:
    entry = await store.process_one(transcript_id)
    if entry is None:
        raise HTTPException(
            status_code=404, detail=f"Transcript {transcript_id} not found"
        )
    return TranscriptResponse.model_validate(entry)
