"""Subscription 订阅关系模型."""

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from hubreader.utils.timeutils import utcnow

DEFAULT_FOLDER = "未分类"


class Subscription(SQLModel, table=True):
    """用户对 Feed 的订阅."""

    __tablename__ = "subscriptions"  # type: ignore[assignment]
    __table_args__ = (
        UniqueConstraint("user_id", "feed_id", name="uq_subscriptions_user_feed"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, description="订阅用户")
    feed_id: int = Field(foreign_key="feeds.id", index=True, description="订阅的 Feed")
    folder: str = Field(default=DEFAULT_FOLDER, description="文件夹")
    sort_order: int = Field(default=0, description="文件夹内排序")
    created_at: datetime = Field(default_factory=utcnow)
