"""
Record store for the SQLite stress harness.

A thin façade over the single `Foo` table. Every operation opens its own
autocommit connection and closes it on every exit path; there is no pooling
and no transaction spanning statements, so each statement is its own atomic
unit and the connection churn is part of the load being generated.

Driver errors are re-raised as `StoreFault` and never retried here.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing, contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Generator, Iterator, Optional, Tuple
from uuid import UUID

from sqlite_stress.config import Settings, get_settings
from sqlite_stress.domain.models import Record
from sqlite_stress.exceptions import StoreFault
from sqlite_stress.utils.logging import get_logger

log = get_logger(__name__)

# Fixed width, so lexical order of the stored text is chronological order.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

_CREATE_TABLE_SQL = """
create table if not exists Foo(
        Id blob not null
    ,   AnInt integer not null
    ,   AReal real not null
    ,   Comment text not null
    ,   Timestamp text not null
    ,   primary key(Id));
"""

_CREATE_INDEX_SQL = "create index if not exists TimestampIndex on Foo(Timestamp asc);"

_INSERT_SQL = """
insert into Foo
    (Id, AnInt, AReal, Comment, Timestamp)
values
    (:id, :anint, :areal, :comment, :timestamp)
"""

_UPDATE_SQL = """
update
    Foo
set
    AnInt = :anint
,   AReal = :areal
,   Comment = :comment
,   Timestamp = :timestamp
where
    Id = :id
"""

_SELECT_SQL = """
select
    Id, AnInt, AReal, Comment, Timestamp
from
    Foo
where
    Timestamp > :timestamp
"""

_DELETE_SQL = "delete from Foo where Id = :id"


def encode_timestamp(value: datetime) -> str:
    """Render a datetime as fixed-width UTC text; naive values are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime(TIMESTAMP_FORMAT)


def decode_timestamp(text: str) -> datetime:
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _bind(record: Record) -> dict:
    return {
        "id": record.id.bytes,
        "anint": record.number,
        "areal": float(record.amount),
        "comment": record.comment,
        "timestamp": encode_timestamp(record.timestamp),
    }


def _decode_row(row: Tuple[bytes, int, float, str, str]) -> Record:
    """Rebuild a record from a stored row; rows in a foreign layout raise `StoreFault`."""
    raw_id, number, amount, comment, timestamp = row
    try:
        return Record(
            id=UUID(bytes=bytes(raw_id)),
            number=number,
            amount=Decimal(str(amount)),
            comment=comment,
            timestamp=decode_timestamp(timestamp),
        )
    except (TypeError, ValueError) as exc:
        raise StoreFault(f"undecodable Foo row: {exc}") from exc


@dataclass(frozen=True)
class RecordStore:
    """
    Stateless handle on the backing store file.

    Holds only the connection parameters, so one instance can be shared by
    every worker thread without locking.

    Attributes
    ----------
    db_path : Path
        Location of the SQLite file; created on first connect.
    timeout : float
        Seconds the driver waits on a locked database before failing.
    """

    db_path: Path
    timeout: float = 5.0

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Open a fresh autocommit connection and guarantee it is closed.

        Any `sqlite3.Error` raised while connecting or inside the block is
        re-raised as `StoreFault`.
        """
        try:
            conn = sqlite3.connect(
                str(self.db_path),
                timeout=self.timeout,
                isolation_level=None,
                check_same_thread=False,
            )
        except sqlite3.Error as exc:
            raise StoreFault(f"cannot open {self.db_path}: {exc}") from exc

        with closing(conn):
            try:
                yield conn
            except sqlite3.Error as exc:
                raise StoreFault(str(exc)) from exc

    def initialize(self) -> None:
        """Create the `Foo` table and its timestamp index when missing."""
        with self._connection() as conn:
            conn.execute(_CREATE_TABLE_SQL)
            conn.execute(_CREATE_INDEX_SQL)
        log.debug("Schema ready", extra={"db_path": str(self.db_path)})

    def insert(self, record: Record) -> None:
        """
        Insert a single record.

        Raises
        ------
        StoreFault
            On a duplicate id or any other driver failure.
        """
        with self._connection() as conn:
            conn.execute(_INSERT_SQL, _bind(record))

    def update(self, record: Record) -> None:
        """
        Overwrite number, amount, comment and timestamp from the given record.

        The values are written exactly as held in memory; an absent id
        affects zero rows and is not reported.
        """
        with self._connection() as conn:
            conn.execute(_UPDATE_SQL, _bind(record))

    def select(self, since: datetime) -> Iterator[Record]:
        """
        Lazily yield records whose timestamp is strictly after `since`.

        The query runs on the first `next()`; the connection stays open
        until the generator is exhausted or closed. Row order is unspecified.
        Each call issues a new query.
        """
        with self._connection() as conn:
            cursor = conn.execute(_SELECT_SQL, {"timestamp": encode_timestamp(since)})
            for row in cursor:
                yield _decode_row(row)

    def delete(self, record_id: UUID) -> None:
        """Delete the record with the given id; a missing id is a no-op."""
        with self._connection() as conn:
            conn.execute(_DELETE_SQL, {"id": record_id.bytes})


def create_record_store(settings: Optional[Settings] = None) -> RecordStore:
    """
    Build a store from settings and make sure its schema exists.

    Parameters
    ----------
    settings : Settings | None
        Overrides the cached process settings when given.

    Returns
    -------
    RecordStore
        An initialized store ready to be shared by workers.
    """
    settings = settings or get_settings()
    store = RecordStore(db_path=Path(settings.db_path), timeout=settings.db_timeout_seconds)
    store.initialize()
    return store


__all__ = [
    "RecordStore",
    "create_record_store",
    "decode_timestamp",
    "encode_timestamp",
]
