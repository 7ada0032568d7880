"""
Workers package for the SQLite stress harness.

Re-exports the worker interfaces and the CRUD-cycle worker so downstream
code can import from `sqlite_stress.workers` directly.
"""

from sqlite_stress.workers.abstract import (
    IterationResult,
    Operation,
    StressWorker,
    WorkerOutcome,
)
from sqlite_stress.workers.crud_cycle import CrudCycleWorker

__all__ = [
    # Abstracts
    "IterationResult",
    "Operation",
    "StressWorker",
    "WorkerOutcome",
    # Concrete workers
    "CrudCycleWorker",
]
