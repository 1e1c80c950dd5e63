"""Tests for calendar-day helpers."""

from datetime import date, datetime, timezone

import pytest

from fitcoach.utils.dates import (
    day_key,
    days_between,
    parse_calendar_date,
    to_local_naive,
    weekday_name,
)


def test_day_key():
    assert day_key(datetime(2026, 10, 19, 23, 59)) == "2026-10-19"
    assert day_key(date(2026, 1, 2)) == "2026-01-02"


@pytest.mark.parametrize("value,expected", [
    ("2026-10-19", date(2026, 10, 19)),
    ("2026-10-19T08:30:00", date(2026, 10, 19)),
    ("Mon Oct 19 2026", date(2026, 10, 19)),
    ("", None),
    (None, None),
    ("yesterday", None),
])
def test_parse_calendar_date(value, expected):
    assert parse_calendar_date(value) == expected


def test_days_between():
    assert days_between(date(2026, 10, 18), date(2026, 10, 19)) == 1
    assert days_between(date(2026, 10, 19), date(2026, 10, 18)) == -1
    assert days_between(date(2026, 9, 30), date(2026, 10, 1)) == 1


def test_weekday_name_is_sunday_first():
    assert weekday_name(date(2026, 10, 18)) == "Sun"
    assert weekday_name(date(2026, 10, 19)) == "Mon"
    assert weekday_name(datetime(2026, 10, 24, 12)) == "Sat"


def test_to_local_naive():
    naive = datetime(2026, 10, 19, 9, 0)
    aware = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

    assert to_local_naive(naive) is naive
    converted = to_local_naive(aware)
    assert converted.tzinfo is None
    assert converted == aware.astimezone().replace(tzinfo=None)
