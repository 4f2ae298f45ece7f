"""查询服务：订阅列表、未读、收藏和订阅详情."""

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from hubreader.core.views import AnnotatedItem, FeedDetail, SubscriptionView
from hubreader.errors import NotFoundError
from hubreader.models.feed import Feed
from hubreader.models.item import FeedItem
from hubreader.models.read_status import ReadStatus
from hubreader.models.subscription import Subscription


class QueryService:
    """面向单个用户的只读查询，结果均带有该用户的阅读状态."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _annotated_items(self, user_id: int):
        """文章 + Feed + 当前用户的状态（左连接，可能为空）."""
        return (
            select(FeedItem, Feed, ReadStatus)
            .join(Feed, FeedItem.feed_id == Feed.id)
            .outerjoin(
                ReadStatus,
                and_(
                    ReadStatus.feed_item_id == FeedItem.id,
                    ReadStatus.user_id == user_id,
                ),
            )
        )

    async def list_subscriptions(self, user_id: int) -> list[SubscriptionView]:
        """获取用户的所有订阅，按文件夹、排序值排列."""
        stmt = (
            select(Subscription, Feed)
            .join(Feed, Subscription.feed_id == Feed.id)
            .where(Subscription.user_id == user_id)
            .order_by(
                Subscription.folder.asc(),
                Subscription.sort_order.asc(),
                Subscription.id.asc(),
            )
        )
        result = await self.session.execute(stmt)
        return [
            SubscriptionView(subscription=subscription, feed=feed)
            for subscription, feed in result.all()
        ]

    async def list_unread(self, user_id: int, limit: int = 50) -> list[AnnotatedItem]:
        """已订阅 Feed 中的未读文章，按发布时间倒序."""
        stmt = (
            self._annotated_items(user_id)
            .join(
                Subscription,
                and_(
                    Subscription.feed_id == FeedItem.feed_id,
                    Subscription.user_id == user_id,
                ),
            )
            .where(
                or_(ReadStatus.id.is_(None), ReadStatus.is_read == False)  # noqa: E712
            )
            .order_by(FeedItem.published_at.desc(), FeedItem.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [AnnotatedItem.build(*row) for row in result.all()]

    async def list_starred(self, user_id: int) -> list[AnnotatedItem]:
        """收藏的文章（不要求仍在订阅中），按发布时间倒序."""
        stmt = (
            self._annotated_items(user_id)
            .where(ReadStatus.is_starred == True)  # noqa: E712
            .order_by(FeedItem.published_at.desc(), FeedItem.id.desc())
        )
        result = await self.session.execute(stmt)
        return [AnnotatedItem.build(*row) for row in result.all()]

    async def get_feed_detail(self, user_id: int, feed_id: int) -> FeedDetail:
        """订阅详情及该 Feed 的全部文章，未订阅时抛出 NotFoundError."""
        stmt = (
            select(Subscription, Feed)
            .join(Feed, Subscription.feed_id == Feed.id)
            .where(Subscription.user_id == user_id, Subscription.feed_id == feed_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            raise NotFoundError("未找到订阅")
        subscription, feed = row

        items_stmt = (
            self._annotated_items(user_id)
            .where(FeedItem.feed_id == feed_id)
            .order_by(FeedItem.published_at.desc(), FeedItem.id.desc())
        )
        items_result = await self.session.execute(items_stmt)

        return FeedDetail(
            subscription=subscription,
            feed=feed,
            items=[AnnotatedItem.build(*r) for r in items_result.all()],
        )

    async def get_item(self, user_id: int, item_id: int) -> AnnotatedItem:
        """单篇文章详情，不存在时抛出 NotFoundError."""
        stmt = self._annotated_items(user_id).where(FeedItem.id == item_id)
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            raise NotFoundError("未找到文章")
        return AnnotatedItem.build(*row)
