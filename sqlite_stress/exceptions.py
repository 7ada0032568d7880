"""
Fault taxonomy for the SQLite stress harness.

Both faults are fatal to the worker that raises them; nothing in the harness
retries or distinguishes transient from permanent failures.
"""

from __future__ import annotations


class StoreFault(Exception):
    """Any failure opening a connection or executing a statement."""


class SequenceEmptyFault(LookupError):
    """The delete step had no selected records to pick from."""


__all__ = ["StoreFault", "SequenceEmptyFault"]
