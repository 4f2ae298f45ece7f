"""核心业务逻辑."""

from hubreader.core.accounts import AccountService
from hubreader.core.aggregator import AggregatorClient, AggregatorFeed, AggregatorItem
from hubreader.core.annotations import AnnotationService
from hubreader.core.ingestion import FeedIngestionService
from hubreader.core.queries import QueryService
from hubreader.core.subscriptions import SubscriptionService
from hubreader.core.views import AnnotatedItem, FeedDetail, SubscriptionView

__all__ = [
    "AccountService",
    "AggregatorClient",
    "AggregatorFeed",
    "AggregatorItem",
    "AnnotatedItem",
    "AnnotationService",
    "FeedDetail",
    "FeedIngestionService",
    "QueryService",
    "SubscriptionService",
    "SubscriptionView",
]
