"""路由依赖：数据库会话、聚合服务客户端和当前用户."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.config import get_settings
from hubreader.core.aggregator import AggregatorClient
from hubreader.errors import UnauthorizedError
from hubreader.models.database import Database
from hubreader.models.user import User

SESSION_USER_KEY = "user_id"


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """从应用持有的数据库句柄打开会话."""
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session


async def get_aggregator() -> AsyncGenerator[AggregatorClient, None]:
    """每个请求使用独立的聚合服务客户端."""
    settings = get_settings()
    client = AggregatorClient(
        base_url=settings.rsshub_base_url,
        timeout=settings.fetch_timeout_seconds,
    )
    try:
        yield client
    finally:
        await client.close()


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> User:
    """从会话 cookie 中取出当前用户，未登录时返回 401."""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise UnauthorizedError()

    user = await session.get(User, user_id)
    if user is None:
        request.session.clear()
        raise UnauthorizedError()
    return user


async def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    """当前用户 ID."""
    return user.id  # type: ignore[return-value]
