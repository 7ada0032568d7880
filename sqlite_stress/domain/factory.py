"""
Synthetic record generation for the worker loop.

Integers and amounts come from the caller's `random.Random` so each worker
owns its own generator; identifiers and comment text come from `uuid4`.
"""
from __future__ import annotations

import random
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlite_stress.domain.models import Record

COMMENT_SEGMENTS = 25
NUMBER_UPPER_BOUND = 1000


def random_text(segments: int = COMMENT_SEGMENTS) -> str:
    """Concatenate `segments` fresh UUID4 strings with no delimiter."""
    return "".join(str(uuid.uuid4()) for _ in range(segments))


def new_record(
    rng: random.Random,
    now: Optional[datetime] = None,
    comment_segments: int = COMMENT_SEGMENTS,
) -> Record:
    """
    Build a fresh record with a random id, bounded number/amount and long comment.

    Parameters
    ----------
    rng : random.Random
        Worker-owned generator for `number` and `amount`.
    now : datetime | None
        Creation time; defaults to the current UTC time.
    comment_segments : int
        Number of UUID strings concatenated into the comment.
    """
    return Record(
        id=uuid.uuid4(),
        number=rng.randrange(NUMBER_UPPER_BOUND),
        amount=Decimal(str(rng.random())),
        comment=random_text(comment_segments),
        timestamp=now or datetime.now(timezone.utc),
    )


__all__ = ["COMMENT_SEGMENTS", "NUMBER_UPPER_BOUND", "new_record", "random_text"]
