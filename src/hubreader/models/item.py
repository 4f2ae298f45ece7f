"""FeedItem 文章模型."""

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from hubreader.utils.timeutils import utcnow


class FeedItem(SQLModel, table=True):
    """Feed 中的一篇文章，入库后内容不再变化."""

    __tablename__ = "feed_items"  # type: ignore[assignment]
    __table_args__ = (
        UniqueConstraint("feed_id", "guid", name="uq_feed_items_feed_guid"),
    )

    id: int | None = Field(default=None, primary_key=True)
    feed_id: int = Field(foreign_key="feeds.id", index=True, description="关联 Feed")
    guid: str = Field(description="条目标识，缺省时使用 link")
    title: str = Field(description="标题")
    link: str = Field(description="原文链接")
    description: str = Field(default="", description="摘要")
    content: str = Field(default="", description="HTML 内容")
    author: str = Field(default="", description="作者")
    categories: str = Field(default="", description="分类，逗号分隔")
    published_at: datetime = Field(index=True, description="发布时间")
    created_at: datetime = Field(default_factory=utcnow)
