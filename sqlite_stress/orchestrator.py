"""
Orchestrator for running the stress workers and summarizing the run.

Usage (example from CLI):
    from sqlite_stress.orchestrator import run_harness

    summary = run_harness(settings)
    print(summary["totals"])

Without an iteration cap the workers loop until they fault, so `run_harness`
only returns once every worker has stopped; in practice the process is
killed first.
"""

from __future__ import annotations

import random
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from sqlite_stress.config import Settings, get_settings
from sqlite_stress.infrastructure.record_store import RecordStore, create_record_store
from sqlite_stress.utils.logging import get_logger
from sqlite_stress.utils.profiler import ProfileStats, profile_block
from sqlite_stress.workers.abstract import Operation, StressWorker, WorkerOutcome
from sqlite_stress.workers.crud_cycle import CrudCycleWorker

log = get_logger(__name__)

WorkerFactory = Callable[[int], StressWorker]


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _worker_factory(
    store: RecordStore, settings: Settings, seed: Optional[int] = None
) -> WorkerFactory:
    """Build workers that share `store` and each own a generator."""

    def make(worker_id: int) -> StressWorker:
        rng = random.Random(seed + worker_id) if seed is not None else random.Random()
        return CrudCycleWorker(worker_id, store, rng=rng, settings=settings)

    return make


def run_workers(
    store: RecordStore,
    worker_count: Optional[int] = None,
    max_iterations: Optional[int] = None,
    seed: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[WorkerOutcome]:
    """
    Start all workers together and block until every one of them stops.

    Parameters
    ----------
    store : RecordStore
        Initialized store shared by every worker.
    worker_count : int | None
        Number of concurrent workers. Defaults to settings.worker_count.
    max_iterations : int | None
        Per-worker iteration cap; None loops until each worker faults.
    seed : int | None
        Base seed; worker `i` uses `seed + i` for reproducible numbers.
    settings : Settings | None
        Worker loop settings. Defaults to the cached process settings.

    Returns
    -------
    List[WorkerOutcome]
        One outcome per worker, ordered by worker id.
    """
    settings = settings or get_settings()
    count = worker_count or settings.worker_count
    make_worker = _worker_factory(store, settings, seed)
    workers = [make_worker(worker_id) for worker_id in range(1, count + 1)]

    outcomes: List[WorkerOutcome] = []

    def _run(worker: StressWorker) -> None:
        outcomes.append(worker.run(max_iterations))

    # Daemon threads: an unbounded run ends when the process is killed.
    threads = [
        threading.Thread(
            target=_run,
            args=(worker,),
            name=f"stress-worker-{worker.worker_id}",
            daemon=True,
        )
        for worker in workers
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    return sorted(outcomes, key=lambda outcome: outcome["worker_id"])


def _summarize(outcomes: List[WorkerOutcome], stats: ProfileStats) -> dict:
    """Merge worker outcomes with profiler stats, rounding floats for readability."""
    totals: Dict[str, int] = {op.value: 0 for op in Operation}
    for outcome in outcomes:
        for name, value in outcome.get("operations", {}).items():
            totals[name] = totals.get(name, 0) + value

    operations = sum(totals.values())
    duration = stats.duration_seconds
    return {
        "outcomes": outcomes,
        "totals": totals,
        "iterations": sum(outcome.get("iterations", 0) for outcome in outcomes),
        "faulted_workers": [o["worker_id"] for o in outcomes if o.get("fault") is not None],
        "duration_seconds": _round_float(duration),
        "operations_per_sec": _round_float(operations / duration) if duration else 0.0,
        "peak_rss_bytes": stats.peak_rss_bytes,
        "cpu_percent": _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None,
    }


def run_harness(
    settings: Optional[Settings] = None,
    seed: Optional[int] = None,
) -> dict:
    """
    Initialize the store, run every worker under the profiler and summarize.

    Parameters
    ----------
    settings : Settings | None
        Effective settings (db path, worker count, iteration cap).
    seed : int | None
        Base seed forwarded to `run_workers`.

    Returns
    -------
    dict
        Per-worker outcomes, operation totals and profiler measurements.
    """
    settings = settings or get_settings()
    log.info("Start DB test")

    store = create_record_store(settings)
    log.debug(
        "Store ready",
        extra={"db_path": str(store.db_path), "workers": settings.worker_count},
    )

    with profile_block("stress-run") as stats:
        outcomes = run_workers(
            store,
            worker_count=settings.worker_count,
            max_iterations=settings.max_iterations,
            seed=seed,
            settings=settings,
        )

    summary = _summarize(outcomes, stats)
    summary["timestamp"] = datetime.now(timezone.utc).isoformat()
    summary["db_path"] = str(store.db_path)
    log.info(
        f"All {len(outcomes)} workers stopped",
        extra={
            "iterations": summary["iterations"],
            "faulted_workers": summary["faulted_workers"],
            "duration": summary["duration_seconds"],
        },
    )
    return summary


__all__ = [
    "run_harness",
    "run_workers",
]
