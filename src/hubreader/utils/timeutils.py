"""时间工具."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """当前 UTC 时间（不带时区），与数据库中存储的时间格式一致."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
