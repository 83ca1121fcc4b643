from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from auditpro.utils.exceptions import TranscriptNotFoundError
from auditpro.utils.file_handling import read_upload_text, validate_file

if TYPE_CHECKING:
    from fastapi import UploadFile

    from auditpro.models.transcript import TranscriptEntry
    from auditpro.services.queue_store import QueueStore

logger = logging.getLogger(__name__)


async def create_from_files(
    store: QueueStore, files: list[UploadFile]
) -> list[TranscriptEntry]:
    """Read every upload concurrently and queue one entry per completed read.

    All files are validated before any is read. Entries land in the queue in
    the order their reads finish, which need not match ``files``. The first
    failed read is raised only after every other read has settled.
    """
    for file in files:
        validate_file(file)

    async def _ingest(file: UploadFile) -> TranscriptEntry:
        text = await read_upload_text(file)
        return store.add_from_file(file.filename or "transcript.txt", text)

    outcomes = await asyncio.gather(
        *(_ingest(f) for f in files), return_exceptions=True
    )
    entries = [o for o in outcomes if not isinstance(o, BaseException)]
    failures = [o for o in outcomes if isinstance(o, BaseException)]
    logger.info(
        "Uploaded %d transcript files (%d failed)", len(entries), len(failures)
    )
    if failures:
        raise failures[0]
    return entries


def create_from_text(store: QueueStore, text: str) -> TranscriptEntry:
    entry = store.add_from_text(text)
    if entry is None:
        raise ValueError("Transcript text is empty")
    return entry


def get_transcript(store: QueueStore, transcript_id: str) -> TranscriptEntry:
    entry = store.get(transcript_id)
    if entry is None:
        raise TranscriptNotFoundError(f"Transcript {transcript_id} not found")
    return entry


def delete_transcript(store: QueueStore, transcript_id: str) -> bool:
    if not store.remove(transcript_id):
        raise TranscriptNotFoundError(f"Transcript {transcript_id} not found")
    return True
