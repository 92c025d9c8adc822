from datetime import UTC, date, datetime

from hagwon.app.core.time import ensure_aware, parse_calendar_date, utc_now, utc_today


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_utc_today_returns_date():
    assert isinstance(utc_today(), date)


def test_parse_calendar_date_accepts_dates_and_datetimes():
    assert parse_calendar_date("2024-01-31") == date(2024, 1, 31)
    assert parse_calendar_date("2024-01-31T23:00:00Z") == date(2024, 1, 31)


def test_parse_calendar_date_rejects_invalid_values():
    assert parse_calendar_date("2024-02-30") is None
    assert parse_calendar_date("not-a-date") is None
    assert parse_calendar_date("") is None
    assert parse_calendar_date(None) is None


def test_ensure_aware_treats_naive_as_utc():
    naive = datetime(2024, 1, 1, 9, 30)
    assert ensure_aware(naive) == datetime(2024, 1, 1, 9, 30, tzinfo=UTC)
    assert ensure_aware(None) is None
