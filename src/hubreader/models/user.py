"""User 用户模型."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from hubreader.utils.timeutils import utcnow


class User(SQLModel, table=True):
    """注册用户."""

    __tablename__ = "users"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, description="登录邮箱")
    name: str = Field(description="昵称")
    password: str = Field(description="bcrypt 哈希后的密码")
    created_at: datetime = Field(default_factory=utcnow)
