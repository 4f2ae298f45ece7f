"""测试配置和 fixtures."""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.api.deps import get_aggregator, get_session
from hubreader.core.accounts import hash_password
from hubreader.core.aggregator import AggregatorClient
from hubreader.core.ingestion import FeedIngestionService
from hubreader.main import app
from hubreader.models.database import Database
from hubreader.models.user import User

FEED_URL = "https://example.com/feed"


def make_payload(
    guids: list[str],
    *,
    title: str = "Example Feed",
    link: str = FEED_URL,
    description: str | None = "An example feed",
    image: str | None = "https://example.com/icon.png",
) -> dict[str, Any]:
    """构造聚合服务返回的 JSON，第 n 篇文章发布于 2024-01-n."""
    return {
        "title": title,
        "link": link,
        "description": description,
        "image": image,
        "items": [
            {
                "title": f"Article {guid}",
                "link": f"{link}/{guid}",
                "description": f"Summary of {guid}",
                "content": f"<p>Body of {guid}</p>",
                "pubDate": f"2024-01-{index + 1:02d}T08:00:00Z",
                "guid": guid,
                "author": "Alice",
                "category": ["tech", "news"],
            }
            for index, guid in enumerate(guids)
        ],
    }


class FeedSource:
    """模拟聚合服务：按 URL 返回预设响应."""

    def __init__(self) -> None:
        self.responses: dict[str, dict[str, Any]] = {}
        self.requests: list[str] = []

    def set_json(self, url: str, payload: Any) -> None:
        self.responses[url] = {"status_code": 200, "json": payload}

    def set_text(self, url: str, text: str, status_code: int = 200) -> None:
        self.responses[url] = {
            "status_code": status_code,
            "text": text,
            "headers": {"Content-Type": "application/xml"},
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url not in self.responses:
            return httpx.Response(404, text="not found")
        return httpx.Response(**self.responses[url])


@pytest.fixture
async def db() -> AsyncGenerator[Database, None]:
    """内存数据库句柄."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.init()
    yield database
    await database.dispose()


@pytest.fixture
async def async_session(db: Database) -> AsyncGenerator[AsyncSession, None]:
    """测试用数据库会话."""
    async with db.session() as session:
        yield session


@pytest.fixture
def feed_source() -> FeedSource:
    return FeedSource()


@pytest.fixture
async def aggregator(feed_source: FeedSource) -> AsyncGenerator[AggregatorClient, None]:
    """使用 MockTransport 的聚合服务客户端."""
    client = AggregatorClient(
        base_url="https://rsshub.test",
        transport=httpx.MockTransport(feed_source.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def ingestion(
    aggregator: AggregatorClient, async_session: AsyncSession
) -> FeedIngestionService:
    return FeedIngestionService(aggregator, async_session)


async def _create_user(session: AsyncSession, name: str, email: str) -> User:
    user = User(name=name, email=email, password=hash_password("secret"))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def alice(async_session: AsyncSession) -> User:
    return await _create_user(async_session, "Alice", "alice@example.com")


@pytest.fixture
async def bob(async_session: AsyncSession) -> User:
    return await _create_user(async_session, "Bob", "bob@example.com")


@pytest.fixture
async def make_client(
    db: Database, aggregator: AggregatorClient
) -> AsyncGenerator[Callable[[], AsyncClient], None]:
    """创建共享同一数据库的 HTTP 客户端（每个客户端各自保存会话 cookie）."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with db.session() as session:
            yield session

    async def override_get_aggregator() -> AsyncGenerator[AggregatorClient, None]:
        yield aggregator

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_aggregator] = override_get_aggregator

    clients: list[AsyncClient] = []

    def factory() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


async def register_and_login(
    client: AsyncClient, name: str = "Alice", email: str = "alice@example.com"
) -> dict[str, Any]:
    """注册并登录，返回用户信息."""
    response = await client.post(
        "/api/register", json={"name": name, "email": email, "password": "secret"}
    )
    assert response.status_code == 200
    response = await client.post(
        "/api/login", json={"email": email, "password": "secret"}
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
async def client(make_client: Callable[[], AsyncClient]) -> AsyncClient:
    """已登录为 Alice 的客户端."""
    ac = make_client()
    await register_and_login(ac)
    return ac
