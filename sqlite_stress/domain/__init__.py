"""
Domain package for the SQLite stress harness.

Exports the record model and the synthetic record generators used by the
worker loop. Keep this package focused on data definitions.
"""

from sqlite_stress.domain.factory import new_record, random_text
from sqlite_stress.domain.models import Record

__all__ = [
    "Record",
    "new_record",
    "random_text",
]
