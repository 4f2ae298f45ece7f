"""ReadStatus 阅读状态模型."""

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from hubreader.utils.timeutils import utcnow


class ReadStatus(SQLModel, table=True):
    """用户对文章的已读/收藏标记.

    没有记录等同于未读、未收藏；记录在首次操作时创建，取消订阅后仍保留。
    """

    __tablename__ = "read_statuses"  # type: ignore[assignment]
    __table_args__ = (
        UniqueConstraint("user_id", "feed_item_id", name="uq_read_statuses_user_item"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    feed_item_id: int = Field(foreign_key="feed_items.id", index=True)
    is_read: bool = Field(default=False, description="是否已读")
    is_starred: bool = Field(default=False, description="是否收藏")
    updated_at: datetime = Field(default_factory=utcnow)
