"""
Tests for day identifiers and week windows
"""
from datetime import datetime

import pytest

from dayzero.core.exceptions import ValidationError
from dayzero.utils.timezone import (
    local_day_id,
    is_valid_day_id,
    parse_day_id,
    shift_day_id,
    to_utc,
    week_bounds,
)
from .conftest import utc


def test_local_day_id_follows_timezone():
    instant = utc(2024, 1, 2, 3, 0)
    assert local_day_id("UTC", instant) == "2024-01-02"
    assert local_day_id("America/Los_Angeles", instant) == "2024-01-01"
    assert local_day_id("Asia/Tokyo", utc(2024, 1, 1, 16, 0)) == "2024-01-02"


def test_local_day_id_accepts_epoch_ms_and_naive_datetimes():
    ms = int(utc(2024, 1, 2, 3, 0).timestamp() * 1000)
    assert local_day_id("America/Los_Angeles", ms) == "2024-01-01"
    assert local_day_id("UTC", datetime(2024, 1, 2, 23, 59)) == "2024-01-02"
    assert to_utc(datetime(2024, 1, 2, 23, 59)) == utc(2024, 1, 2, 23, 59)


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        local_day_id("Mars/Olympus_Mons", utc(2024, 1, 1))


def test_shift_day_id_crosses_month_and_leap_day():
    assert shift_day_id("2024-03-01", -1) == "2024-02-29"
    assert shift_day_id("2024-01-01", -1) == "2023-12-31"
    assert shift_day_id("2023-12-31", 1) == "2024-01-01"


def test_shift_day_id_ignores_dst_transition():
    # US clocks jumped forward on 2024-03-10
    assert shift_day_id("2024-03-11", -1) == "2024-03-10"
    assert shift_day_id("2024-03-10", -1) == "2024-03-09"


def test_week_bounds_sunday_to_saturday():
    assert week_bounds("2024-01-10") == ("2024-01-07", "2024-01-13")
    assert week_bounds("2024-01-07") == ("2024-01-07", "2024-01-13")
    assert week_bounds("2024-01-13") == ("2024-01-07", "2024-01-13")
    assert week_bounds("2024-01-06") == ("2023-12-31", "2024-01-06")


def test_parse_day_id_rejects_malformed():
    for bad in ("2024-13-01", "2024-02-30", "01/02/2024", "", None):
        with pytest.raises(ValidationError):
            parse_day_id(bad)


@pytest.mark.parametrize("bad", ["2024-1-3", "2024-01-3", "2024-1-03", "2024-01-03\n", " 2024-01-03"])
def test_parse_day_id_requires_canonical_form(bad):
    with pytest.raises(ValidationError):
        parse_day_id(bad)
    assert is_valid_day_id(bad) is False
