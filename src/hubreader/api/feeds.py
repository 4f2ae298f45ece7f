"""订阅源 API."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.api.deps import get_aggregator, get_current_user_id, get_session
from hubreader.api.schemas import (
    SubscribeRequest,
    SubscriptionUpdate,
    feed_detail_to_dict,
    subscription_to_dict,
)
from hubreader.config import get_settings
from hubreader.core.aggregator import AggregatorClient
from hubreader.core.ingestion import FeedIngestionService
from hubreader.core.queries import QueryService
from hubreader.core.subscriptions import SubscriptionService

router = APIRouter(prefix="/api/feeds", tags=["feeds"])


@router.get("")
async def list_feeds(
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> list[dict]:
    """获取订阅列表."""
    views = await QueryService(session).list_subscriptions(user_id)
    return [subscription_to_dict(view) for view in views]


@router.post("")
async def subscribe(
    body: SubscribeRequest,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    aggregator: AggregatorClient = Depends(get_aggregator),
) -> dict:
    """添加订阅：抓取 Feed 并创建订阅关系."""
    service = SubscriptionService(
        session,
        FeedIngestionService(aggregator, session),
        default_folder=get_settings().default_folder,
    )
    view = await service.subscribe(user_id, body.url, body.folder)
    return subscription_to_dict(view)


@router.get("/{feed_id}")
async def get_feed(
    feed_id: int,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """获取订阅详情及文章列表."""
    detail = await QueryService(session).get_feed_detail(user_id, feed_id)
    return feed_detail_to_dict(detail)


@router.patch("/{feed_id}")
async def update_feed(
    feed_id: int,
    body: SubscriptionUpdate,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """更新订阅的文件夹和排序."""
    view = await SubscriptionService(session).update_subscription(
        user_id,
        feed_id,
        folder=body.folder,
        sort_order=body.sort_order,
    )
    return subscription_to_dict(view)


@router.delete("/{feed_id}")
async def unsubscribe(
    feed_id: int,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """取消订阅."""
    await SubscriptionService(session).unsubscribe(user_id, feed_id)
    return {"success": True}
