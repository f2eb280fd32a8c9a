from datetime import datetime, timedelta, timezone

from reminder_engine.bucket import TimeBucket


def test_same_minute_buckets_are_equal():
    a = TimeBucket.from_timestamp(datetime(2025, 1, 1, 10, 0, 1))
    b = TimeBucket.from_timestamp(datetime(2025, 1, 1, 10, 0, 59))
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_next_minute_is_a_different_bucket():
    a = TimeBucket(datetime(2025, 1, 1, 10, 0, 59))
    b = TimeBucket(datetime(2025, 1, 1, 10, 1, 0))
    assert a != b
    assert a < b


def test_timestamp_is_kept_for_display():
    stamp = datetime(2025, 1, 1, 10, 0, 42, 123)
    bucket = TimeBucket(stamp)
    assert bucket.timestamp == stamp
    assert str(bucket) == "2025-01-01 10:00"


def test_aware_timestamps_compare_in_utc():
    plus_one = timezone(timedelta(hours=1))
    local = TimeBucket(datetime(2025, 1, 1, 10, 0, 30, tzinfo=plus_one))
    utc = TimeBucket(datetime(2025, 1, 1, 9, 0, 5, tzinfo=timezone.utc))
    assert local == utc
