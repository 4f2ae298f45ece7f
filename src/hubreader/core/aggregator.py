"""RSSHub 聚合服务客户端."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PayloadValidationError

from hubreader.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://rsshub.app"


class AggregatorItem(BaseModel):
    """聚合服务返回的单篇文章."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str
    link: str
    description: str | None = None
    content: str | None = None
    pub_date: str | None = Field(default=None, alias="pubDate")
    guid: str | None = None
    author: str | None = None
    category: list[str] | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _wrap_single_category(cls, value: Any) -> Any:
        # 部分路由只返回单个分类字符串
        if isinstance(value, str):
            return [value]
        return value


class AggregatorFeed(BaseModel):
    """聚合服务返回的 Feed."""

    model_config = ConfigDict(extra="ignore")

    title: str
    link: str
    description: str | None = None
    image: str | None = None
    items: list[AggregatorItem] = []


class AggregatorClient:
    """RSSHub 风格的聚合服务客户端，只接受 JSON 响应."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """关闭客户端."""
        await self._client.aclose()

    async def __aenter__(self) -> "AggregatorClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def resolve_url(self, url: str) -> str:
        """RSSHub 路径（以 / 开头）补全为聚合服务地址."""
        if url.startswith("/"):
            return f"{self.base_url}{url}"
        return url

    async def fetch(self, url: str) -> AggregatorFeed:
        """获取并校验 Feed 内容."""
        full_url = self.resolve_url(url)

        try:
            response = await self._client.get(full_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"获取 RSS 失败: {full_url} - {e}")
            raise FetchError() from e

        try:
            data = response.json()
        except ValueError as e:
            # XML 等非 JSON 内容不做解析
            logger.warning(f"不支持直接解析 XML，请使用 RSSHub 实例: {full_url}")
            raise FetchError() from e

        try:
            return AggregatorFeed.model_validate(data)
        except PayloadValidationError as e:
            logger.warning(f"RSS 内容格式不正确: {full_url} - {e.error_count()} 处错误")
            raise FetchError() from e
