"""文章 API."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.api.deps import get_current_user_id, get_session
from hubreader.api.schemas import ItemUpdate, item_to_dict, status_to_dict
from hubreader.config import get_settings
from hubreader.core.annotations import AnnotationService
from hubreader.core.queries import QueryService
from hubreader.models.read_status import ReadStatus

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("")
async def list_items(
    filter: Literal["unread", "starred"] = Query("unread", description="筛选条件"),
    limit: int | None = Query(None, ge=1, description="未读列表数量上限"),
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> list[dict]:
    """获取未读或收藏的文章列表."""
    queries = QueryService(session)
    if filter == "starred":
        items = await queries.list_starred(user_id)
    else:
        items = await queries.list_unread(user_id, limit or get_settings().unread_limit)
    return [item_to_dict(item) for item in items]


@router.get("/{item_id}")
async def get_item(
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """获取文章详情，并标记为已读."""
    await AnnotationService(session).mark_read(user_id, item_id)
    item = await QueryService(session).get_item(user_id, item_id)
    return item_to_dict(item)


@router.patch("/{item_id}")
async def update_item(
    item_id: int,
    body: ItemUpdate,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """更新文章的已读/收藏状态."""
    annotations = AnnotationService(session)
    status: ReadStatus | None = None

    if body.action == "read":
        status = await annotations.mark_read(user_id, item_id)
    elif body.action == "star":
        status = await annotations.toggle_star(user_id, item_id)

    if body.is_read is not None:
        status = await annotations.mark_read(user_id, item_id, body.is_read)
    if body.is_starred is not None:
        status = await annotations.toggle_star(user_id, item_id, body.is_starred)

    return {"success": True, "status": status_to_dict(status)}  # type: ignore[arg-type]
