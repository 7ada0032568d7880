"""
SQLite Stress - concurrent-writer stress harness for a file-backed SQLite store.

Several worker threads share one database file and loop over the same cycle:

- Insert a freshly generated record
- Update its comment
- Select every record from the last minute
- Occasionally delete the first record selected

Each operation opens and closes its own connection, so the load combines
writer contention with connection churn. A worker that hits any fault logs
it and stops; its siblings keep going.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from sqlite_stress.config import Settings, get_settings
from sqlite_stress.domain import Record, new_record, random_text
from sqlite_stress.exceptions import SequenceEmptyFault, StoreFault
from sqlite_stress.infrastructure import RecordStore, create_record_store
from sqlite_stress.orchestrator import run_harness, run_workers
from sqlite_stress.utils.logging import configure_logging, get_logger
from sqlite_stress.utils.profiler import ProfileStats, profile_block
from sqlite_stress.workers import CrudCycleWorker, Operation, WorkerOutcome

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Record",
    "new_record",
    "random_text",
    # Store
    "RecordStore",
    "create_record_store",
    "StoreFault",
    "SequenceEmptyFault",
    # Worker loop
    "CrudCycleWorker",
    "Operation",
    "WorkerOutcome",
    "run_harness",
    "run_workers",
    # Logging
    "configure_logging",
    "get_logger",
    # Profiling
    "ProfileStats",
    "profile_block",
]
