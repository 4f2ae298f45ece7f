"""示例数据：测试用户、示例订阅源和文章.

用法::

    python -m hubreader.seed
"""

import asyncio
import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from hubreader.config import get_settings
from hubreader.core.accounts import hash_password
from hubreader.core.aggregator import AggregatorFeed, AggregatorItem
from hubreader.core.ingestion import FeedIngestionService
from hubreader.models.database import Database, upsert
from hubreader.models.item import FeedItem
from hubreader.models.read_status import ReadStatus
from hubreader.models.subscription import Subscription
from hubreader.models.user import User
from hubreader.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

DEMO_EMAIL = "test@example.com"
DEMO_PASSWORD = "password123"
DEMO_FOLDER = "示例订阅"
ITEMS_PER_FEED = 5

SAMPLE_FEEDS = [
    {
        "title": "少数派",
        "link": "https://rsshub.app/sspai/matrix",
        "description": "少数派 - Matrix",
        "site_url": "https://sspai.com",
        "image": "https://cdn.sspai.com/sspai/assets/img/favicon/icon.ico",
    },
    {
        "title": "知乎每日精选",
        "link": "https://rsshub.app/zhihu/daily",
        "description": "知乎每日精选",
        "site_url": "https://www.zhihu.com",
        "image": "https://static.zhihu.com/heifetz/favicon.ico",
    },
    {
        "title": "豆瓣最受欢迎的书评",
        "link": "https://rsshub.app/douban/book/review/best",
        "description": "豆瓣最受欢迎的书评",
        "site_url": "https://book.douban.com",
        "image": "https://img3.doubanio.com/favicon.ico",
    },
]


def build_sample_payload(sample: dict[str, str], now: datetime) -> AggregatorFeed:
    """为示例订阅源生成文章，每篇间隔一天."""
    items = [
        AggregatorItem(
            title=f"{sample['title']} 示例文章 {i}",
            link=f"{sample['site_url']}/article/{i}",
            guid=f"{sample['link']}#item-{i}",
            description=f"这是 {sample['title']} 的示例文章 {i}，用于测试 RSS 阅读器功能。",
            content=(
                f"<h2>这是 {sample['title']} 的示例文章 {i}</h2>"
                "<p>这是一篇用于测试 RSS 阅读器功能的示例文章。</p>"
            ),
            author="示例作者",
            category=["示例分类"],
            pub_date=(now - timedelta(days=i)).isoformat(),
        )
        for i in range(1, ITEMS_PER_FEED + 1)
    ]
    return AggregatorFeed(
        title=sample["title"],
        link=sample["link"],
        description=sample["description"],
        image=sample["image"],
        items=items,
    )


async def seed(session: AsyncSession) -> User:
    """写入示例数据，可重复执行."""
    user, created = await upsert(
        session,
        User,
        {"email": DEMO_EMAIL},
        create={"name": "测试用户", "password": hash_password(DEMO_PASSWORD)},
    )
    await session.commit()
    if created:
        logger.info(f"创建测试用户成功: {user.email}")

    # 示例数据不经过聚合服务，直接写入
    ingestion = FeedIngestionService(None, session)
    now = utcnow()

    for sample in SAMPLE_FEEDS:
        feed, _ = await ingestion.save_payload(build_sample_payload(sample, now))

        await upsert(
            session,
            Subscription,
            {"user_id": user.id, "feed_id": feed.id},
            create={"folder": DEMO_FOLDER},
        )
        logger.info(f"创建 RSS 源成功: {feed.title}")

        item_ids = await _feed_item_ids(session, feed.id)  # type: ignore[arg-type]
        for index, item_id in enumerate(item_ids, start=1):
            # 偶数篇标记已读，其中能被 3 整除的同时收藏
            if index % 2 == 0:
                await upsert(
                    session,
                    ReadStatus,
                    {"user_id": user.id, "feed_item_id": item_id},
                    create={"is_read": True, "is_starred": index % 3 == 0},
                )
        await session.commit()

    logger.info("数据库初始化成功！")
    return user


async def _feed_item_ids(session: AsyncSession, feed_id: int) -> list[int]:
    """按发布时间从新到旧返回文章 ID."""
    stmt = (
        select(FeedItem.id)
        .where(FeedItem.feed_id == feed_id)
        .order_by(FeedItem.published_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def _main() -> None:
    db = Database(get_settings().database_url)
    await db.init()
    try:
        async with db.session() as session:
            await seed(session)
    finally:
        await db.dispose()


def main() -> None:
    """命令行入口."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(_main())


if __name__ == "__main__":
    main()
