"""In-memory transcript queue: the single source of truth for the dashboard.

The store owns the ordered entries (newest first), the current selection and
the active view. Every mutation publishes an immutable ``QueueSnapshot`` to
the registered listeners, so a rendering layer never reads shared state
directly.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel

from auditpro.llm.factory import get_llm_provider
from auditpro.models.transcript import ActiveView, AuditStatus, TranscriptEntry
from auditpro.services import analysis_service
from auditpro.utils.exceptions import (
    AnalysisError,
    BatchInProgressError,
    TranscriptNotFoundError,
)

logger = logging.getLogger(__name__)

Analyzer = Callable[[str], Awaitable[str]]


class QueueSnapshot(BaseModel):
    entries: tuple[TranscriptEntry, ...]
    selected_id: str | None
    active_view: ActiveView
    batch_running: bool

    model_config = {"frozen": True}

    @property
    def completed_count(self) -> int:
        return sum(1 for e in self.entries if e.status == AuditStatus.COMPLETED)


SnapshotListener = Callable[[QueueSnapshot], None]


class QueueStore:
    def __init__(self, analyzer: Analyzer) -> None:
        self._analyzer = analyzer
        self._entries: list[TranscriptEntry] = []
        self._selected_id: str | None = None
        self._active_view = ActiveView.INPUT
        self._batch_running = False
        self._paste_count = 0
        self._listeners: list[SnapshotListener] = []

    # ── Read side ─────────────────────────────────────────────────────────

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    @property
    def selected(self) -> TranscriptEntry | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    @property
    def batch_running(self) -> bool:
        return self._batch_running

    def get(self, entry_id: str) -> TranscriptEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def snapshot(self) -> QueueSnapshot:
        return QueueSnapshot(
            entries=tuple(self._entries),
            selected_id=self._selected_id,
            active_view=self._active_view,
            batch_running=self._batch_running,
        )

    def completed_results(self, query: str = "") -> list[TranscriptEntry]:
        """Completed entries whose name or result contains ``query``, ignoring case."""
        needle = query.lower()
        return [
            e
            for e in self._entries
            if e.status == AuditStatus.COMPLETED
            and (needle in e.name.lower() or needle in (e.result or "").lower())
        ]

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Collection mutations ──────────────────────────────────────────────

    def add_from_text(self, text: str) -> TranscriptEntry | None:
        if not text.strip():
            return None
        self._paste_count += 1
        entry = TranscriptEntry(
            name=f"Pasted Transcript {self._paste_count}",
            content=text,
            upload_method="paste",
        )
        return self._prepend(entry)

    def add_from_file(self, name: str, content: str) -> TranscriptEntry:
        entry = TranscriptEntry(name=name, content=content, upload_method="file")
        return self._prepend(entry)

    def remove(self, entry_id: str) -> bool:
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        if self._selected_id == entry_id:
            self._selected_id = None
        logger.info("Removed transcript %s", entry_id)
        self._publish()
        return True

    def clear_all(self) -> int:
        removed = len(self._entries)
        self._entries = []
        self._selected_id = None
        logger.info("Cleared %d transcripts from the queue", removed)
        self._publish()
        return removed

    # ── View state ────────────────────────────────────────────────────────

    def select(self, entry_id: str | None) -> TranscriptEntry | None:
        if entry_id is None:
            self._selected_id = None
            self._publish()
            return None
        entry = self.get(entry_id)
        if entry is None:
            raise TranscriptNotFoundError(f"Transcript {entry_id} not found")
        self._selected_id = entry_id
        self._publish()
        return entry

    def set_view(self, view: ActiveView) -> None:
        self._active_view = view
        self._publish()

    # ── Processing ────────────────────────────────────────────────────────

    async def process_one(self, entry_id: str) -> TranscriptEntry | None:
        """Analyze one entry and record the outcome on it.

        No-op for unknown ids and for entries already processing or
        completed. Analysis failures are stored on the entry and never
        raised. If the entry is removed while the call is in flight, the
        outcome is dropped.
        """
        entry = self.get(entry_id)
        if entry is None or entry.status in (
            AuditStatus.PROCESSING,
            AuditStatus.COMPLETED,
        ):
            return entry

        self._replace(entry_id, TranscriptEntry.as_processing)
        logger.info("Processing transcript %s (%s)", entry_id, entry.name)

        try:
            result = await self._analyzer(entry.content)
        except AnalysisError as e:
            logger.warning("Analysis failed for transcript %s: %s", entry_id, e)
            message = str(e) or analysis_service.DEFAULT_PROVIDER_ERROR
        except Exception as e:
            logger.exception("Unexpected failure analyzing transcript %s", entry_id)
            message = str(e) or analysis_service.DEFAULT_PROVIDER_ERROR
        else:
            return self._replace(entry_id, lambda current: current.as_completed(result))

        return self._replace(entry_id, lambda current: current.as_failed(message))

    def start_batch(self) -> list[str]:
        """Reserve the batch slot and snapshot the ids of pending entries."""
        if self._batch_running:
            raise BatchInProgressError("A batch is already being processed")
        self._batch_running = True
        entry_ids = [e.id for e in self._entries if e.status == AuditStatus.PENDING]
        logger.info("Starting batch of %d pending transcripts", len(entry_ids))
        self._publish()
        return entry_ids

    async def run_batch(self, entry_ids: list[str]) -> list[TranscriptEntry]:
        """Process ``entry_ids`` one at a time; a failure never stops the batch."""
        try:
            for entry_id in entry_ids:
                await self.process_one(entry_id)
        finally:
            self._batch_running = False

        if entry_ids:
            self._active_view = ActiveView.RESULTS
            if self.get(entry_ids[0]) is not None:
                self._selected_id = entry_ids[0]
        self._publish()

        processed = [self.get(entry_id) for entry_id in entry_ids]
        finished = [e for e in processed if e is not None]
        failed = sum(1 for e in finished if e.status == AuditStatus.ERROR)
        logger.info(
            "Batch finished: %d processed, %d failed", len(finished), failed
        )
        return finished

    async def process_all_pending(self) -> list[TranscriptEntry]:
        return await self.run_batch(self.start_batch())

    # ── Internals ─────────────────────────────────────────────────────────

    def _prepend(self, entry: TranscriptEntry) -> TranscriptEntry:
        self._entries.insert(0, entry)
        logger.info("Queued transcript %s (%s)", entry.id, entry.name)
        self._publish()
        return entry

    def _replace(
        self,
        entry_id: str,
        transform: Callable[[TranscriptEntry], TranscriptEntry],
    ) -> TranscriptEntry | None:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                updated = transform(entry)
                self._entries[index] = updated
                self._publish()
                return updated
        logger.info("Transcript %s was removed before its analysis finished", entry_id)
        return None

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Queue snapshot listener failed")


# ── Process-wide instance ─────────────────────────────────────────────────

async def _analyze_with_configured_provider(content: str) -> str:
    return await analysis_service.analyze_transcript(content, get_llm_provider())


_store_instance = QueueStore(_analyze_with_configured_provider)


def get_queue_store() -> QueueStore:
    return _store_instance
