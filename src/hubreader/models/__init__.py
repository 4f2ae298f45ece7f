"""数据模型."""

from hubreader.models.database import Database, init_db, upsert
from hubreader.models.feed import Feed
from hubreader.models.item import FeedItem
from hubreader.models.read_status import ReadStatus
from hubreader.models.subscription import DEFAULT_FOLDER, Subscription
from hubreader.models.user import User

__all__ = [
    "DEFAULT_FOLDER",
    "Database",
    "Feed",
    "FeedItem",
    "ReadStatus",
    "Subscription",
    "User",
    "init_db",
    "upsert",
]
