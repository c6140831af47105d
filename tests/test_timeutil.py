from datetime import datetime, timedelta, timezone

from app.core.timeutil import EPOCH, EPOCH_ISO, now_iso, parse_iso, to_iso


def test_to_iso_uses_millisecond_z_format():
    value = datetime(2025, 3, 4, 5, 6, 7, 891234, tzinfo=timezone.utc)

    assert to_iso(value) == "2025-03-04T05:06:07.891Z"


def test_naive_datetimes_are_treated_as_utc():
    assert to_iso(datetime(2025, 1, 1)) == "2025-01-01T00:00:00.000Z"


def test_offsets_are_normalized_to_utc():
    value = datetime(2025, 1, 1, 3, 0, tzinfo=timezone(timedelta(hours=3)))

    assert to_iso(value) == "2025-01-01T00:00:00.000Z"


def test_parse_iso_accepts_z_suffix():
    assert parse_iso(EPOCH_ISO) == EPOCH
    assert parse_iso("2025-03-04T05:06:07.891Z") == datetime(2025, 3, 4, 5, 6, 7, 891000, tzinfo=timezone.utc)


def test_iso_strings_order_like_their_instants():
    earlier = to_iso(datetime(2025, 1, 1, 9, 59, 59, 999000, tzinfo=timezone.utc))
    later = to_iso(datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc))

    assert earlier < later
    assert EPOCH_ISO < now_iso()
