from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from auditpro.schemas.transcript import QueueSnapshotResponse, SelectionUpdate, ViewUpdate
from auditpro.services.queue_store import QueueStore, get_queue_store
from auditpro.utils.exceptions import TranscriptNotFoundError

router = APIRouter(prefix="/queue")


@router.get("", response_model=QueueSnapshotResponse)
async def get_queue(store: QueueStore = Depends(get_queue_store)) -> QueueSnapshotResponse:
    return QueueSnapshotResponse.model_validate(store.snapshot())


@router.put("/selection", response_model=QueueSnapshotResponse)
async def update_selection(
    body: SelectionUpdate, store: QueueStore = Depends(get_queue_store)
) -> QueueSnapshotResponse:
    try:
        store.select(body.transcript_id)
    except TranscriptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return QueueSnapshotResponse.model_validate(store.snapshot())


@router.put("/view", response_model=QueueSnapshotResponse)
async def update_view(
    body: ViewUpdate, store: QueueStore = Depends(get_queue_store)
) -> QueueSnapshotResponse:
    store.set_view(body.view)
    return QueueSnapshotResponse.model_validate(store.snapshot())
