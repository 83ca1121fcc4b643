"""Unit tests for the in-memory transcript queue.

Tests cover:
- Adding transcripts from pasted text and uploaded files
- Removal, purge and selection bookkeeping
- The pending -> processing -> completed/error lifecycle
- Sequential batch processing and partial failure
- Search over completed audits and snapshot publishing
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from auditpro.models.transcript import ActiveView, AuditStatus
from auditpro.services.queue_store import QueueStore
from auditpro.utils.exceptions import (
    BatchInProgressError,
    ConfigurationError,
    EmptyResponseError,
    ProviderError,
    TranscriptNotFoundError,
)


# ── Adding entries ────────────────────────────────────────────────────────


class TestAddFromText:
    def test_adds_pending_entry(self, store: QueueStore):
        entry = store.add_from_text("Agent: Hello, how can I help?")

        assert entry is not None
        assert len(store.entries) == 1
        assert entry.status == AuditStatus.PENDING
        assert entry.result is None
        assert entry.error is None
        assert entry.upload_method == "paste"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_text_is_ignored(self, store: QueueStore, text: str):
        assert store.add_from_text(text) is None
        assert store.entries == ()

    def test_names_follow_running_counter(self, store: QueueStore):
        first = store.add_from_text("one")
        store.remove(first.id)
        second = store.add_from_text("two")

        assert first.name == "Pasted Transcript 1"
        assert second.name == "Pasted Transcript 2"

    def test_newest_entry_first(self, store: QueueStore):
        store.add_from_text("older")
        newest = store.add_from_text("newer")

        assert store.entries[0].id == newest.id

    def test_content_kept_verbatim(self, store: QueueStore):
        text = "  Customer: my modem keeps dropping  \n"
        entry = store.add_from_text(text)
        assert entry.content == text


class TestAddFromFile:
    def test_adds_named_entry(self, store: QueueStore):
        entry = store.add_from_file("call-0412.txt", "Agent: Thanks for calling")

        assert entry.name == "call-0412.txt"
        assert entry.upload_method == "file"
        assert entry.status == AuditStatus.PENDING

    def test_each_file_is_independent(self, store: QueueStore):
        a = store.add_from_file("a.txt", "alpha")
        b = store.add_from_file("b.txt", "beta")

        assert a.id != b.id
        assert [e.name for e in store.entries] == ["b.txt", "a.txt"]


# ── Removal and selection ─────────────────────────────────────────────────


class TestRemove:
    def test_remove_twice_is_safe(self, store: QueueStore):
        entry = store.add_from_text("hello")

        assert store.remove(entry.id) is True
        assert store.remove(entry.id) is False
        assert store.entries == ()

    def test_removing_selected_clears_selection(self, store: QueueStore):
        entry = store.add_from_text("hello")
        store.select(entry.id)

        store.remove(entry.id)

        assert store.selected is None
        assert store.snapshot().selected_id is None

    def test_removing_other_keeps_selection(self, store: QueueStore):
        keep = store.add_from_text("keep")
        drop = store.add_from_text("drop")
        store.select(keep.id)

        store.remove(drop.id)

        assert store.selected.id == keep.id

    def test_clear_all(self, store: QueueStore):
        entry = store.add_from_text("one")
        store.add_from_text("two")
        store.select(entry.id)

        assert store.clear_all() == 2
        assert store.entries == ()
        assert store.selected is None

    def test_select_unknown_raises(self, store: QueueStore):
        with pytest.raises(TranscriptNotFoundError):
            store.select("missing")

    def test_select_none_clears(self, store: QueueStore):
        entry = store.add_from_text("one")
        store.select(entry.id)
        store.select(None)
        assert store.selected is None


# ── Single processing ─────────────────────────────────────────────────────


class TestProcessOne:
    @pytest.mark.asyncio
    async def test_success_stores_exact_result(self, analyzer: AsyncMock):
        analyzer.return_value = "## TITLE\nbody"
        store = QueueStore(analyzer)
        entry = store.add_from_text("transcript body")

        updated = await store.process_one(entry.id)

        analyzer.assert_awaited_once_with("transcript body")
        assert updated.status == AuditStatus.COMPLETED
        assert updated.result == "## TITLE\nbody"
        assert updated.error is None
        assert store.get(entry.id) == updated

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            ConfigurationError("API key is not configured."),
            ProviderError("quota exceeded"),
            EmptyResponseError("No analysis generated from the model."),
            RuntimeError("socket closed"),
        ],
    )
    async def test_failure_marks_error(self, exc: Exception):
        store = QueueStore(AsyncMock(side_effect=exc))
        entry = store.add_from_text("transcript")

        updated = await store.process_one(entry.id)

        assert updated.status == AuditStatus.ERROR
        assert updated.error == str(exc)
        assert updated.result is None

    @pytest.mark.asyncio
    async def test_failure_without_message_gets_fallback(self):
        store = QueueStore(AsyncMock(side_effect=ProviderError()))
        entry = store.add_from_text("transcript")

        updated = await store.process_one(entry.id)

        assert updated.error == "Failed to analyze transcript."

    @pytest.mark.asyncio
    async def test_unknown_id_is_noop(self, store: QueueStore, analyzer: AsyncMock):
        assert await store.process_one("missing") is None
        analyzer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reentry_while_processing_is_noop(self):
        gate = asyncio.Event()
        calls = 0

        async def slow_analyzer(content: str) -> str:
            nonlocal calls
            calls += 1
            await gate.wait()
            return "done"

        store = QueueStore(slow_analyzer)
        entry = store.add_from_text("transcript")

        first = asyncio.create_task(store.process_one(entry.id))
        await asyncio.sleep(0)
        assert store.get(entry.id).status == AuditStatus.PROCESSING

        second = await store.process_one(entry.id)
        assert second.status == AuditStatus.PROCESSING

        gate.set()
        await first
        assert calls == 1
        assert store.get(entry.id).status == AuditStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_completed_entry_not_reprocessed(
        self, store: QueueStore, analyzer: AsyncMock
    ):
        entry = store.add_from_text("transcript")
        await store.process_one(entry.id)
        await store.process_one(entry.id)

        assert analyzer.await_count == 1

    @pytest.mark.asyncio
    async def test_retry_from_error_clears_error(self):
        analyzer = AsyncMock(side_effect=[ProviderError("boom"), "## OK\nfine"])
        store = QueueStore(analyzer)
        entry = store.add_from_text("transcript")

        failed = await store.process_one(entry.id)
        assert failed.status == AuditStatus.ERROR

        retried = await store.process_one(entry.id)
        assert retried.status == AuditStatus.COMPLETED
        assert retried.error is None
        assert retried.result == "## OK\nfine"

    @pytest.mark.asyncio
    async def test_removed_mid_flight_result_dropped(self):
        gate = asyncio.Event()

        async def slow_analyzer(content: str) -> str:
            await gate.wait()
            return "late result"

        store = QueueStore(slow_analyzer)
        entry = store.add_from_text("transcript")

        task = asyncio.create_task(store.process_one(entry.id))
        await asyncio.sleep(0)
        store.remove(entry.id)
        gate.set()

        assert await task is None
        assert store.entries == ()


# ── Batch processing ──────────────────────────────────────────────────────


class TestProcessAllPending:
    @pytest.mark.asyncio
    async def test_calls_are_sequential(self):
        in_flight = 0
        max_in_flight = 0
        seen: list[str] = []

        async def tracking_analyzer(content: str) -> str:
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            seen.append(content)
            in_flight -= 1
            return f"## RESULT\n{content}"

        store = QueueStore(tracking_analyzer)
        for text in ("first", "second", "third"):
            store.add_from_text(text)

        processed = await store.process_all_pending()

        assert len(processed) == 3
        assert max_in_flight == 1
        # Snapshot order is queue order, newest first.
        assert seen == ["third", "second", "first"]
        assert all(e.status == AuditStatus.COMPLETED for e in store.entries)

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_batch(self):
        analyzer = AsyncMock(side_effect=["## A\nok", ProviderError("boom"), "## C\nok"])
        store = QueueStore(analyzer)
        for text in ("c", "b", "a"):
            store.add_from_text(text)

        await store.process_all_pending()

        assert analyzer.await_count == 3
        statuses = [e.status for e in store.entries]
        assert statuses == [
            AuditStatus.COMPLETED,
            AuditStatus.ERROR,
            AuditStatus.COMPLETED,
        ]

    @pytest.mark.asyncio
    async def test_only_pending_entries_are_batched(
        self, store: QueueStore, analyzer: AsyncMock
    ):
        done = store.add_from_text("already done")
        await store.process_one(done.id)
        store.add_from_text("waiting")
        analyzer.reset_mock()

        processed = await store.process_all_pending()

        assert [e.content for e in processed] == ["waiting"]
        analyzer.assert_awaited_once_with("waiting")

    @pytest.mark.asyncio
    async def test_entries_added_during_batch_are_excluded(self):
        store: QueueStore

        async def adding_analyzer(content: str) -> str:
            store.add_from_text(f"added while processing {content}")
            return "## R\nok"

        store = QueueStore(adding_analyzer)
        store.add_from_text("one")
        store.add_from_text("two")

        processed = await store.process_all_pending()

        assert len(processed) == 2
        pending = [e for e in store.entries if e.status == AuditStatus.PENDING]
        assert len(pending) == 2

    @pytest.mark.asyncio
    async def test_switches_to_results_and_selects_first(self, store: QueueStore):
        store.add_from_text("older")
        newest = store.add_from_text("newest")

        await store.process_all_pending()

        snapshot = store.snapshot()
        assert snapshot.active_view == ActiveView.RESULTS
        assert snapshot.selected_id == newest.id
        assert store.selected.result is not None

    @pytest.mark.asyncio
    async def test_empty_batch_keeps_view(self, store: QueueStore):
        processed = await store.process_all_pending()

        assert processed == []
        assert store.snapshot().active_view == ActiveView.INPUT
        assert store.batch_running is False

    @pytest.mark.asyncio
    async def test_second_batch_rejected_while_running(self, store: QueueStore):
        store.add_from_text("one")
        queued = store.start_batch()

        with pytest.raises(BatchInProgressError):
            store.start_batch()

        await store.run_batch(queued)
        assert store.batch_running is False
        assert store.start_batch() == []


# ── Search and snapshots ──────────────────────────────────────────────────


class TestCompletedResults:
    @pytest.mark.asyncio
    async def test_query_matches_name_or_result(self):
        replies = {
            "t1": "## SECTION 7: RISK INDICATORS\nHigh churn RISK",
            "t2": "## SECTION 1\nRoutine call",
            "t3": "## SECTION 1\nNothing notable",
        }
        store = QueueStore(AsyncMock(side_effect=lambda content: replies[content]))
        store.add_from_text("t1")
        store.add_from_file("risk-review.txt", "t2")
        store.add_from_file("plain.txt", "t3")
        store.add_from_text("never processed risk")
        await store.process_all_pending()

        names = sorted(e.name for e in store.completed_results("risk"))
        assert names == ["Pasted Transcript 1", "risk-review.txt"]

    @pytest.mark.asyncio
    async def test_empty_query_returns_all_completed(self, store: QueueStore):
        store.add_from_text("one")
        store.add_from_text("two")
        await store.process_all_pending()
        store.add_from_text("pending")

        assert len(store.completed_results("")) == 2


class TestSnapshots:
    def test_listener_receives_snapshot_per_mutation(self, store: QueueStore):
        received = []
        store.subscribe(received.append)

        entry = store.add_from_text("one")
        store.select(entry.id)
        store.remove(entry.id)

        assert len(received) == 3
        assert received[0].entries[0].id == entry.id
        assert received[1].selected_id == entry.id
        assert received[2].entries == ()

    def test_unsubscribe_stops_delivery(self, store: QueueStore):
        received = []
        unsubscribe = store.subscribe(received.append)
        unsubscribe()

        store.add_from_text("one")

        assert received == []

    def test_failing_listener_does_not_break_mutation(self, store: QueueStore):
        def broken(snapshot):
            raise RuntimeError("render failed")

        store.subscribe(broken)
        entry = store.add_from_text("one")

        assert store.get(entry.id) is not None

    @pytest.mark.asyncio
    async def test_snapshots_are_immutable_history(self, store: QueueStore):
        received = []
        store.subscribe(received.append)
        entry = store.add_from_text("one")

        await store.process_one(entry.id)

        statuses = [s.entries[0].status for s in received]
        assert statuses == [
            AuditStatus.PENDING,
            AuditStatus.PROCESSING,
            AuditStatus.COMPLETED,
        ]
