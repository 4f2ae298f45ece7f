"""Feed 订阅源模型."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from hubreader.utils.timeutils import utcnow


class Feed(SQLModel, table=True):
    """RSS 订阅源（所有订阅用户共享同一行）."""

    __tablename__ = "feeds"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(description="Feed 标题")
    url: str = Field(unique=True, index=True, description="Feed URL（唯一标识）")
    description: str = Field(default="", description="Feed 描述")
    site_url: str | None = Field(default=None, description="网站 URL")
    image_url: str | None = Field(default=None, description="图标 URL")
    last_fetched: datetime | None = Field(default=None, description="最近抓取时间")
    created_at: datetime = Field(default_factory=utcnow)
