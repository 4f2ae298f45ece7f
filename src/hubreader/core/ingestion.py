"""Feed 抓取入库服务."""

import logging
from datetime import datetime, timezone

from dateutil import parser as date_parser
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.core.aggregator import AggregatorClient, AggregatorFeed, AggregatorItem
from hubreader.models.database import upsert
from hubreader.models.feed import Feed
from hubreader.models.item import FeedItem
from hubreader.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


def parse_published_at(value: str | None, fallback: datetime) -> datetime:
    """解析 pubDate（RFC 822 / ISO 8601），统一为不带时区的 UTC 时间."""
    if not value:
        return fallback

    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        logger.warning(f"无法解析发布时间 {value!r}，使用抓取时间")
        return fallback

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class FeedIngestionService:
    """抓取 Feed 并写入数据库.

    Feed 按 url 去重，文章按 (feed_id, guid) 去重；已存在的文章不会被更新。
    一次抓取的所有写入在同一个事务内完成。
    """

    def __init__(
        self, aggregator: AggregatorClient | None, session: AsyncSession
    ) -> None:
        self.aggregator = aggregator
        self.session = session

    async def ingest(self, source_url: str) -> Feed:
        """抓取并入库，返回入库后的 Feed."""
        if self.aggregator is None:
            msg = "未配置聚合服务客户端"
            raise RuntimeError(msg)

        payload = await self.aggregator.fetch(source_url)
        feed, _ = await self.save_payload(payload)
        return feed

    async def save_payload(self, payload: AggregatorFeed) -> tuple[Feed, int]:
        """写入 Feed 及其新文章，返回 (Feed, 新增文章数)."""
        try:
            feed = await self._save_feed(payload)
            new_count = await self._save_items(feed.id, payload.items)  # type: ignore[arg-type]
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            f"Feed 入库完成: {feed.url}, 新增文章 {new_count}/{len(payload.items)}"
        )
        return feed, new_count

    async def _save_feed(self, payload: AggregatorFeed) -> Feed:
        now = utcnow()
        feed, created = await upsert(
            self.session,
            Feed,
            {"url": payload.link},
            create={
                "title": payload.title,
                "description": payload.description or "",
                "site_url": payload.link,
                "image_url": payload.image,
                "last_fetched": now,
            },
            # 空值保留原有的描述和图标
            update={
                "title": payload.title,
                "description": payload.description or None,
                "image_url": payload.image or None,
                "last_fetched": now,
            },
        )
        if created:
            logger.info(f"新建 Feed: {payload.title} ({payload.link})")
        return feed

    async def _save_items(self, feed_id: int, items: list[AggregatorItem]) -> int:
        fetched_at = utcnow()
        new_count = 0

        for item in items:
            description = item.description or ""
            _, created = await upsert(
                self.session,
                FeedItem,
                {"feed_id": feed_id, "guid": item.guid or item.link},
                create={
                    "title": item.title,
                    "link": item.link,
                    "description": description,
                    "content": item.content or description,
                    "author": item.author or "",
                    "categories": ",".join(item.category or []),
                    "published_at": parse_published_at(item.pub_date, fetched_at),
                },
            )
            if created:
                new_count += 1

        return new_count
