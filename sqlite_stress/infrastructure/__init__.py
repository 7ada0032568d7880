"""
Infrastructure package for the SQLite stress harness.

Centralizes backing-store concerns (connections, schema, statements). Keep
this layer focused on I/O and resource management, decoupled from the worker
loop.
"""

from sqlite_stress.infrastructure.record_store import RecordStore, create_record_store

__all__ = [
    "RecordStore",
    "create_record_store",
]
