from datetime import date, datetime, timedelta, timezone

import pytest

from booking.utils.dates import find_duplicate_days, parse_duration, to_calendar_day


def test_plain_iso_date():
    assert to_calendar_day("2025-03-01") == date(2025, 3, 1)


def test_datetime_string_with_zulu_suffix():
    assert to_calendar_day("2025-03-01T23:30:00Z") == date(2025, 3, 1)


def test_offset_datetime_is_converted_to_utc_day():
    # 01:00 at +08:00 is still the previous day in UTC
    assert to_calendar_day("2025-03-02T01:00:00+08:00") == date(2025, 3, 1)


def test_naive_datetime_treated_as_utc():
    assert to_calendar_day(datetime(2025, 3, 1, 23, 59)) == date(2025, 3, 1)


def test_aware_datetime_object():
    value = datetime(2025, 3, 2, 3, 0, tzinfo=timezone(timedelta(hours=5)))
    assert to_calendar_day(value) == date(2025, 3, 1)


def test_date_passthrough():
    assert to_calendar_day(date(2025, 1, 1)) == date(2025, 1, 1)


@pytest.mark.parametrize("value", ["", "   ", "not-a-date", "2025-13-40", None, 42])
def test_invalid_values_raise(value):
    with pytest.raises(ValueError):
        to_calendar_day(value)


def test_duplicates_detected_across_formats():
    dups = find_duplicate_days(["2025-03-01", "2025-03-01T10:00:00Z", "2025-03-02"])
    assert dups == [date(2025, 3, 1)]


def test_no_duplicates():
    assert find_duplicate_days(["2025-03-01", "2025-03-02", "2025-03-03"]) == []


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("15m", timedelta(minutes=15)),
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30s", timedelta(seconds=30)),
        ("3600", timedelta(seconds=3600)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "15x", "m15", "-5m", "1.5h"])
def test_parse_duration_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)
