"""订阅管理服务."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from hubreader.core.ingestion import FeedIngestionService
from hubreader.core.views import SubscriptionView
from hubreader.errors import AlreadySubscribedError, NotFoundError
from hubreader.models.database import upsert
from hubreader.models.feed import Feed
from hubreader.models.subscription import DEFAULT_FOLDER, Subscription

logger = logging.getLogger(__name__)


class SubscriptionService:
    """订阅、取消订阅和整理订阅."""

    def __init__(
        self,
        session: AsyncSession,
        ingestion: FeedIngestionService | None = None,
        default_folder: str = DEFAULT_FOLDER,
    ) -> None:
        self.session = session
        self.ingestion = ingestion
        self.default_folder = default_folder

    async def subscribe(
        self,
        user_id: int,
        feed_url: str,
        folder: str | None = None,
    ) -> SubscriptionView:
        """抓取 Feed 后为用户创建订阅."""
        if self.ingestion is None:
            msg = "未配置 Feed 入库服务"
            raise RuntimeError(msg)

        # 先入库：Feed 可能是第一次出现
        feed = await self.ingestion.ingest(feed_url)

        # 并发订阅同一 Feed 时只有一方 created 为 True
        subscription, created = await upsert(
            self.session,
            Subscription,
            {"user_id": user_id, "feed_id": feed.id},
            create={"folder": folder or self.default_folder},
        )
        await self.session.commit()

        if not created:
            raise AlreadySubscribedError()

        logger.info(f"用户 {user_id} 订阅了 {feed.url}")
        return SubscriptionView(subscription=subscription, feed=feed)

    async def unsubscribe(self, user_id: int, feed_id: int) -> None:
        """取消订阅，只删除订阅关系."""
        subscription = await self.get_subscription(user_id, feed_id)
        await self.session.delete(subscription)
        await self.session.commit()
        logger.info(f"用户 {user_id} 取消订阅 Feed {feed_id}")

    async def update_subscription(
        self,
        user_id: int,
        feed_id: int,
        folder: str | None = None,
        sort_order: int | None = None,
    ) -> SubscriptionView:
        """更新文件夹和排序，未提供的字段保持不变."""
        subscription = await self.get_subscription(user_id, feed_id)

        if folder is not None:
            subscription.folder = folder
        if sort_order is not None:
            subscription.sort_order = sort_order
        await self.session.commit()

        feed = await self.session.get(Feed, feed_id)
        return SubscriptionView(subscription=subscription, feed=feed)  # type: ignore[arg-type]

    async def get_subscription(self, user_id: int, feed_id: int) -> Subscription:
        """获取用户的订阅，不存在时抛出 NotFoundError."""
        stmt = select(Subscription).where(
            Subscription.user_id == user_id,
            Subscription.feed_id == feed_id,
        )
        result = await self.session.execute(stmt)
        subscription = result.scalar_one_or_none()
        if subscription is None:
            raise NotFoundError("未找到订阅")
        return subscription
