"""
Integration tests that run real threads against a temporary SQLite file.

These exercise the properties the harness exists to stress:
1. Concurrent inserts of distinct records never lose a row
2. Two inserts of the same id produce exactly one StoreFault
3. A bounded run of the full worker loop completes and persists its rows
"""

from __future__ import annotations

import random
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from sqlite_stress.config import Settings
from sqlite_stress.domain.factory import new_record
from sqlite_stress.exceptions import StoreFault
from sqlite_stress.infrastructure.record_store import RecordStore
from sqlite_stress.orchestrator import run_harness, run_workers
from sqlite_stress.workers.abstract import Operation

THREADS = 5
INSERTS_PER_THREAD = 20
RUN_ITERATIONS = 15


def _row_count(db_path: Path) -> int:
    conn = sqlite3.connect(db_path)
    try:
        return conn.execute("select count(*) from Foo").fetchone()[0]
    finally:
        conn.close()


def test_concurrent_distinct_inserts_are_all_visible(store: RecordStore) -> None:
    start = datetime.now(timezone.utc)
    inserted: list = []
    errors: list[Exception] = []
    barrier = threading.Barrier(THREADS)

    def worker(seed: int) -> None:
        rng = random.Random(seed)
        barrier.wait()
        for _ in range(INSERTS_PER_THREAD):
            record = new_record(rng)
            try:
                store.insert(record)
            except Exception as exc:  # pragma: no cover - surfaced by the assertion below
                errors.append(exc)
                return
            inserted.append(record.id)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(THREADS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    selected = {record.id for record in store.select(start - timedelta(seconds=1))}
    assert len(inserted) == THREADS * INSERTS_PER_THREAD
    assert selected == set(inserted)


def test_concurrent_duplicate_id_inserts_fail_exactly_once(
    store: RecordStore, make_record
) -> None:
    record = make_record()
    barrier = threading.Barrier(2)
    results: list[str] = []
    lock = threading.Lock()

    def worker(comment: str) -> None:
        barrier.wait()
        try:
            store.insert(record.model_copy(update={"comment": comment}))
            outcome = "ok"
        except StoreFault:
            outcome = "fault"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker, args=(c,)) for c in ("a", "b")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == ["fault", "ok"]
    assert _row_count(store.db_path) == 1


def test_run_workers_bounded_run_persists_rows(
    store: RecordStore, test_settings: Settings
) -> None:
    # Deletes never outnumber earlier inserts, so a window is never empty.
    settings = test_settings.model_copy(update={"delete_one_in": 1})

    outcomes = run_workers(
        store,
        worker_count=THREADS,
        max_iterations=RUN_ITERATIONS,
        seed=11,
        settings=settings,
    )

    assert [o["worker_id"] for o in outcomes] == list(range(1, THREADS + 1))
    for outcome in outcomes:
        assert outcome["fault"] is None, outcome
        assert outcome["iterations"] == RUN_ITERATIONS
        assert outcome["operations"][Operation.INSERT.value] == RUN_ITERATIONS
        assert outcome["operations"][Operation.DELETE.value] == RUN_ITERATIONS

    # Two workers may pick the same first record, so some deletes are no-ops;
    # the first delete to run always removes a row.
    assert _row_count(store.db_path) < THREADS * RUN_ITERATIONS


@pytest.mark.slow
def test_run_harness_reports_totals(test_settings: Settings) -> None:
    settings = test_settings.model_copy(
        update={"worker_count": THREADS, "max_iterations": RUN_ITERATIONS}
    )

    summary = run_harness(settings, seed=3)

    assert summary["db_path"] == settings.db_path
    assert len(summary["outcomes"]) == THREADS
    if not summary["faulted_workers"]:
        assert summary["iterations"] == THREADS * RUN_ITERATIONS
        assert summary["totals"][Operation.INSERT.value] == THREADS * RUN_ITERATIONS
    assert summary["duration_seconds"] >= 0
    assert _row_count(Path(settings.db_path)) >= summary["totals"][Operation.INSERT.value] - (
        summary["totals"][Operation.DELETE.value]
    )
