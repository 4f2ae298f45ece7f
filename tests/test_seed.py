"""测试示例数据."""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from hubreader.core.accounts import verify_password
from hubreader.core.queries import QueryService
from hubreader.models.item import FeedItem
from hubreader.models.read_status import ReadStatus
from hubreader.seed import DEMO_FOLDER, DEMO_PASSWORD, seed


class TestSeed:
    """测试 seed."""

    async def test_creates_demo_data(self, async_session: AsyncSession) -> None:
        user = await seed(async_session)

        assert verify_password(DEMO_PASSWORD, user.password)
        queries = QueryService(async_session)
        views = await queries.list_subscriptions(user.id)
        assert len(views) == 3
        assert {view.subscription.folder for view in views} == {DEMO_FOLDER}
        # 每个源 5 篇，其中第 2、4 篇已读
        assert len(await queries.list_unread(user.id, 100)) == 9

    async def test_is_repeatable(self, async_session: AsyncSession) -> None:
        await seed(async_session)
        user = await seed(async_session)

        items = (await async_session.execute(select(FeedItem))).scalars().all()
        statuses = (await async_session.execute(select(ReadStatus))).scalars().all()
        assert len(items) == 15
        assert len(statuses) == 6
        assert len(await QueryService(async_session).list_subscriptions(user.id)) == 3
