from datetime import datetime, timedelta, timezone

from sunatstock.schemas.dates import to_naive_utc


def test_offset_datetime_becomes_naive_utc():
    jakarta = timezone(timedelta(hours=7))
    assert to_naive_utc(datetime(2024, 1, 15, 9, 0, tzinfo=jakarta)) == datetime(2024, 1, 15, 2, 0)


def test_naive_and_missing_values_pass_through():
    assert to_naive_utc(datetime(2024, 1, 15, 9, 0)) == datetime(2024, 1, 15, 9, 0)
    assert to_naive_utc(None) is None
