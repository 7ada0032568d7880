"""
Domain models for the SQLite stress harness.

Defines the single record shape stored in the `Foo` table. The model is
mutable on purpose: workers replace `comment` in place between insert and
update, and assignment is validated like construction.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class Record(BaseModel):
    """
    Representation of a single row in the `Foo` table.
    """

    id: UUID = Field(..., description="Primary key, stored as 16 raw bytes.")
    number: int = Field(..., ge=0, lt=1000, description="Bounded random integer.")
    amount: Decimal = Field(..., ge=0, lt=1, description="Fixed-point amount in [0, 1).")
    comment: str = Field(..., description="Long pseudo-random text.")
    timestamp: datetime = Field(..., description="Creation time, UTC.")

    model_config = {
        "validate_assignment": True,
        "arbitrary_types_allowed": False,
    }

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # Naive values are taken to already be UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


__all__ = ["Record"]
