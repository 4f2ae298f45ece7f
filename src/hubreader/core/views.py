"""服务层返回的组合视图."""

from dataclasses import dataclass, field

from hubreader.models.feed import Feed
from hubreader.models.item import FeedItem
from hubreader.models.read_status import ReadStatus
from hubreader.models.subscription import Subscription


@dataclass
class SubscriptionView:
    """订阅及其 Feed."""

    subscription: Subscription
    feed: Feed


@dataclass
class AnnotatedItem:
    """带当前用户阅读状态的文章."""

    item: FeedItem
    feed: Feed
    is_read: bool = False
    is_starred: bool = False

    @classmethod
    def build(
        cls, item: FeedItem, feed: Feed, status: ReadStatus | None
    ) -> "AnnotatedItem":
        """没有状态记录时视为未读、未收藏."""
        if status is None:
            return cls(item=item, feed=feed)
        return cls(
            item=item,
            feed=feed,
            is_read=status.is_read,
            is_starred=status.is_starred,
        )


@dataclass
class FeedDetail:
    """订阅详情：订阅、Feed 及全部文章."""

    subscription: Subscription
    feed: Feed
    items: list[AnnotatedItem] = field(default_factory=list)
