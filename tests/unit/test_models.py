import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from sqlite_stress.domain.models import Record


def _fields(**overrides):
    fields = {
        "id": uuid.uuid4(),
        "number": 5,
        "amount": Decimal("0.25"),
        "comment": "c1",
        "timestamp": datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return fields


@pytest.mark.parametrize(
    "overrides",
    [
        {"number": -1},
        {"number": 1000},
        {"amount": Decimal("1")},
        {"amount": Decimal("-0.1")},
    ],
)
def test_record_rejects_out_of_range_values(overrides):
    with pytest.raises(ValidationError):
        Record(**_fields(**overrides))


def test_record_normalizes_timestamp_to_utc():
    local = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    record = Record(**_fields(timestamp=local))
    assert record.timestamp == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert record.timestamp.utcoffset() == timedelta(0)


def test_record_treats_naive_timestamp_as_utc():
    record = Record(**_fields(timestamp=datetime(2024, 1, 1, 12, 0)))
    assert record.timestamp.tzinfo is timezone.utc


def test_record_comment_is_mutable_and_validated():
    record = Record(**_fields())
    record.comment = "c2"
    assert record.comment == "c2"
    with pytest.raises(ValidationError):
        record.number = 5000
