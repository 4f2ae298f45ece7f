"""阅读状态服务（已读 / 收藏）."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from hubreader.errors import NotFoundError
from hubreader.models.database import upsert
from hubreader.models.item import FeedItem
from hubreader.models.read_status import ReadStatus
from hubreader.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class AnnotationService:
    """按 (user_id, item_id) 维护阅读状态，只影响当前用户自己的记录."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def mark_read(
        self, user_id: int, item_id: int, is_read: bool = True
    ) -> ReadStatus:
        """标记已读/未读，不改变收藏状态."""
        await self._require_item(item_id)

        status, _ = await upsert(
            self.session,
            ReadStatus,
            {"user_id": user_id, "feed_item_id": item_id},
            create={"is_read": is_read},
            update={"is_read": is_read, "updated_at": utcnow()},
        )
        await self.session.commit()
        return status

    async def toggle_star(
        self, user_id: int, item_id: int, explicit: bool | None = None
    ) -> ReadStatus:
        """
        切换收藏状态.

        Args:
            user_id: 用户 ID
            item_id: 文章 ID
            explicit: 指定时直接设置为该值，否则取反当前值（无记录视为未收藏）
        """
        await self._require_item(item_id)

        if explicit is None:
            current = await self.get_status(user_id, item_id)
            starred = not current.is_starred if current else True
        else:
            starred = explicit

        status, _ = await upsert(
            self.session,
            ReadStatus,
            {"user_id": user_id, "feed_item_id": item_id},
            create={"is_starred": starred},
            update={"is_starred": starred, "updated_at": utcnow()},
        )
        await self.session.commit()
        return status

    async def get_status(self, user_id: int, item_id: int) -> ReadStatus | None:
        """获取阅读状态记录，可能不存在."""
        stmt = select(ReadStatus).where(
            ReadStatus.user_id == user_id,
            ReadStatus.feed_item_id == item_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _require_item(self, item_id: int) -> None:
        if await self.session.get(FeedItem, item_id) is None:
            raise NotFoundError("未找到文章")
