from datetime import date, datetime

import pytest

from utils.helpers import (
    coerce_text,
    format_date,
    parse_date,
    parse_leading_int,
    serialize_id,
    to_storage_datetime,
)


@pytest.mark.parametrize("raw", [
    "2023-01-15",
    "2023-01-15T23:59:59",
    "2023-01-15T10:00:00+02:00",
    "Sun Jan 15 2023",
    "January 15, 2023",
    "Jan 15, 2023",
    "01/15/2023",
    " 2023-01-15 ",
    "2023-1-15",
    "2023/01/15",
    "Jan 15 2023",
    "January 15 2023",
    "15 January 2023",
    "15 Jan 2023",
])
def test_parse_date_formats(raw):
    assert parse_date(raw) == date(2023, 1, 15)


def test_parse_date_passes_dates_through():
    assert parse_date(date(2020, 2, 29)) == date(2020, 2, 29)
    assert parse_date(datetime(2020, 2, 29, 13, 0)) == date(2020, 2, 29)


@pytest.mark.parametrize("raw", ["", "tomorrow", "2023-13-01", "15/01/2023"])
def test_parse_date_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_date(raw)


def test_format_date_pads_day():
    assert format_date(date(2024, 1, 1)) == "Mon Jan 01 2024"
    assert format_date(datetime(2023, 1, 15, 0, 0)) == "Sun Jan 15 2023"


def test_to_storage_datetime_is_midnight():
    assert to_storage_datetime(date(2023, 1, 15)) == datetime(2023, 1, 15, 0, 0)


@pytest.mark.parametrize("raw, expected", [
    ("30", 30),
    ("30.7", 30),
    ("45min", 45),
    (" -5", -5),
    (12, 12),
    (12.9, 12),
    ("abc", None),
    ("", None),
    (float("nan"), None),
    (True, None),
])
def test_parse_leading_int(raw, expected):
    assert parse_leading_int(raw) == expected


def test_serialize_id():
    from bson import ObjectId

    oid = ObjectId()
    assert serialize_id({"_id": oid, "username": "a"}) == {"_id": str(oid), "username": "a"}


@pytest.mark.parametrize("raw, expected", [
    (123, "123"),
    (1.5, "1.5"),
    (30.0, "30"),
    (True, "true"),
    ("run", "run"),
])
def test_coerce_text(raw, expected):
    assert coerce_text(raw) == expected
