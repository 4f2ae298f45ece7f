"""请求体校验模型与响应序列化."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from hubreader.core.views import AnnotatedItem, FeedDetail, SubscriptionView
from hubreader.models.feed import Feed
from hubreader.models.read_status import ReadStatus
from hubreader.models.user import User


class RequestBody(BaseModel):
    """请求体基类：接受 camelCase 和 snake_case 字段名."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RegisterRequest(RequestBody):
    """注册."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)


class LoginRequest(RequestBody):
    """登录."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SubscribeRequest(RequestBody):
    """添加订阅."""

    url: str = Field(min_length=1, description="Feed URL 或 RSSHub 路径")
    folder: str | None = None


class SubscriptionUpdate(RequestBody):
    """更新订阅，未提供的字段保持不变."""

    folder: str | None = None
    sort_order: int | None = None


class ItemUpdate(RequestBody):
    """更新文章状态：action 快捷操作，或直接指定 isRead / isStarred."""

    action: Literal["read", "star"] | None = None
    is_read: bool | None = None
    is_starred: bool | None = None

    @model_validator(mode="after")
    def _require_change(self) -> "ItemUpdate":
        if self.action is None and self.is_read is None and self.is_starred is None:
            msg = "请提供 action、isRead 或 isStarred"
            raise ValueError(msg)
        return self


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def user_to_dict(user: User) -> dict[str, Any]:
    """用户信息（不含密码）."""
    return {"id": user.id, "name": user.name, "email": user.email}


def feed_to_dict(feed: Feed) -> dict[str, Any]:
    return {
        "id": feed.id,
        "title": feed.title,
        "url": feed.url,
        "description": feed.description,
        "siteUrl": feed.site_url,
        "imageUrl": feed.image_url,
        "lastFetched": _iso(feed.last_fetched),
    }


def subscription_to_dict(view: SubscriptionView) -> dict[str, Any]:
    subscription = view.subscription
    return {
        "id": subscription.id,
        "userId": subscription.user_id,
        "feedId": subscription.feed_id,
        "folder": subscription.folder,
        "sortOrder": subscription.sort_order,
        "createdAt": _iso(subscription.created_at),
        "feed": feed_to_dict(view.feed),
    }


def item_to_dict(annotated: AnnotatedItem) -> dict[str, Any]:
    """文章及当前用户的阅读状态."""
    item = annotated.item
    return {
        "id": item.id,
        "feedId": item.feed_id,
        "guid": item.guid,
        "title": item.title,
        "link": item.link,
        "description": item.description,
        "content": item.content,
        "author": item.author,
        "categories": item.categories.split(",") if item.categories else [],
        "publishedAt": _iso(item.published_at),
        "isRead": annotated.is_read,
        "isStarred": annotated.is_starred,
        "feed": feed_to_dict(annotated.feed),
    }


def feed_detail_to_dict(detail: FeedDetail) -> dict[str, Any]:
    return {
        "subscription": subscription_to_dict(
            SubscriptionView(subscription=detail.subscription, feed=detail.feed)
        ),
        "items": [item_to_dict(item) for item in detail.items],
    }


def status_to_dict(status: ReadStatus) -> dict[str, Any]:
    return {
        "id": status.id,
        "userId": status.user_id,
        "feedItemId": status.feed_item_id,
        "isRead": status.is_read,
        "isStarred": status.is_starred,
    }
