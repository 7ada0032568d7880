"""
Worker interfaces and result contracts for the SQLite stress harness.

Workers report each loop iteration as an `IterationResult` and the whole run
as a `WorkerOutcome` TypedDict, so the dispatcher decides what a fault means
instead of letting it unwind the thread.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, TypedDict, runtime_checkable


class Operation(str, Enum):
    """Store operations a worker logs, by their log-line name."""

    INSERT = "Insert"
    UPDATE = "Update"
    SELECT = "Select"
    DELETE = "Delete"


class WorkerOutcome(TypedDict, total=False):
    """
    Summary returned by a worker once it stops.

    `fault` and `fault_type` are None for a worker that ran out of
    iterations; otherwise they describe the fault that stopped it.
    """

    worker_id: int
    iterations: int
    operations: Dict[str, int]
    duration_seconds: float
    fault: Optional[str]
    fault_type: Optional[str]
    failed_operation: Optional[str]


@dataclass
class IterationResult:
    """Operations completed in one loop iteration, and the fault that cut it short."""

    operations: List[Operation] = field(default_factory=list)
    fault: Optional[Exception] = None
    failed_operation: Optional[Operation] = None

    @property
    def ok(self) -> bool:
        return self.fault is None


@runtime_checkable
class StressWorker(Protocol):
    """
    Common interface for the units the orchestrator schedules on threads.

    Attributes
    ----------
    worker_id : int
        1-based identifier printed in every log line.
    name : str
        A short machine-friendly identifier of the workload.
    """

    worker_id: int
    name: str

    def run(self, max_iterations: Optional[int] = None) -> WorkerOutcome:
        """
        Loop until a fault or until `max_iterations` iterations completed.

        Parameters
        ----------
        max_iterations : int | None
            Iteration cap; None loops until a fault.
        """
        ...


__all__ = [
    "IterationResult",
    "Operation",
    "StressWorker",
    "WorkerOutcome",
]
