"""测试时间工具."""

from datetime import datetime, timedelta, timezone

from hubreader.utils.timeutils import utcnow


def test_utcnow_is_naive_utc() -> None:
    now = utcnow()
    expected = datetime.now(timezone.utc).replace(tzinfo=None)

    assert now.tzinfo is None
    assert abs(expected - now) < timedelta(seconds=5)
