"""
CRUD-cycle worker: the load each harness thread generates.

Every iteration inserts a fresh record, rewrites its comment through
`update`, reads back the last minute of records and, about once every
hundred iterations, deletes the first record it read.

The record's timestamp is never refreshed between insert and update, so the
update writes the creation timestamp back unchanged.
"""

from __future__ import annotations

import itertools
import random
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Sequence

from sqlite_stress.config import Settings, get_settings
from sqlite_stress.domain.factory import new_record, random_text
from sqlite_stress.domain.models import Record
from sqlite_stress.exceptions import SequenceEmptyFault
from sqlite_stress.infrastructure.record_store import RecordStore
from sqlite_stress.utils.logging import get_logger
from sqlite_stress.workers.abstract import IterationResult, Operation, WorkerOutcome

log = get_logger(__name__)


def _first(items: Sequence[Record]) -> Record:
    if not items:
        raise SequenceEmptyFault("select returned no records to delete")
    return items[0]


class CrudCycleWorker:
    """
    Drive one insert/update/select/maybe-delete cycle per iteration.

    A worker owns its random generator and the record it creates during an
    iteration; the store is shared with every other worker.
    """

    name: str = "crud_cycle"
    description: str = "Insert, update, recent-window select, 1-in-N delete."

    def __init__(
        self,
        worker_id: int,
        store: RecordStore,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.worker_id = worker_id
        self.store = store
        self.rng = rng or random.Random()
        self.select_window = timedelta(seconds=settings.select_window_seconds)
        self.delete_one_in = settings.delete_one_in
        self.comment_segments = settings.comment_segments

    def _completed(self, result: IterationResult, operation: Operation) -> None:
        result.operations.append(operation)
        log.info(
            operation.value,
            extra={"worker_id": self.worker_id, "operation": operation.value},
        )

    def iterate(self) -> IterationResult:
        """
        Run a single cycle and report it; faults are captured, never raised.
        """
        result = IterationResult()
        operation = Operation.INSERT
        try:
            record = new_record(self.rng, comment_segments=self.comment_segments)
            self.store.insert(record)
            self._completed(result, operation)

            record.comment = random_text(self.comment_segments)

            operation = Operation.UPDATE
            self.store.update(record)
            self._completed(result, operation)

            operation = Operation.SELECT
            since = datetime.now(timezone.utc) - self.select_window
            items = list(self.store.select(since))
            self._completed(result, operation)

            if self.rng.randrange(self.delete_one_in) == 0:
                operation = Operation.DELETE
                self.store.delete(_first(items).id)
                self._completed(result, operation)
        except Exception as exc:  # noqa: BLE001 - any fault is fatal to this worker
            result.fault = exc
            result.failed_operation = operation
        return result

    def run(self, max_iterations: Optional[int] = None) -> WorkerOutcome:
        """
        Iterate until a fault, or until `max_iterations` cycles completed.

        A fault is logged once to stderr and stops this worker only.
        """
        counts: Dict[str, int] = {op.value: 0 for op in Operation}
        iterations = 0
        fault: Optional[Exception] = None
        failed_operation: Optional[Operation] = None
        loop = itertools.count() if max_iterations is None else range(max_iterations)

        start = time.perf_counter()
        for _ in loop:
            result = self.iterate()
            for op in result.operations:
                counts[op.value] += 1
            if not result.ok:
                fault = result.fault
                failed_operation = result.failed_operation
                break
            iterations += 1
        duration = time.perf_counter() - start

        if fault is not None:
            log.error(
                f"{type(fault).__name__}: {fault}",
                extra={
                    "worker_id": self.worker_id,
                    "operation": failed_operation.value if failed_operation else None,
                },
            )
            log.debug(
                "Worker stopped",
                exc_info=fault,
                extra={"worker_id": self.worker_id},
            )

        return WorkerOutcome(
            worker_id=self.worker_id,
            iterations=iterations,
            operations=counts,
            duration_seconds=duration,
            fault=str(fault) if fault is not None else None,
            fault_type=type(fault).__name__ if fault is not None else None,
            failed_operation=failed_operation.value if failed_operation else None,
        )


__all__ = ["CrudCycleWorker"]
