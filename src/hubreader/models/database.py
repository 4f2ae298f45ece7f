"""数据库句柄与通用 upsert."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel, select

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class Database:
    """数据库句柄：持有引擎和会话工厂，由进程入口创建并显式传递."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init(self) -> None:
        """创建所有表."""
        # 确保所有模型已注册到 metadata
        import hubreader.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info(f"数据库已初始化: {self.engine.url.render_as_string()}")

    async def dispose(self) -> None:
        """关闭连接池."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """打开一个会话."""
        async with self.session_factory() as session:
            yield session


async def init_db(database_url: str) -> Database:
    """创建数据库句柄并建表."""
    db = Database(database_url)
    await db.init()
    return db


async def _find(
    session: AsyncSession, model: type[ModelT], key: dict[str, Any]
) -> ModelT | None:
    result = await session.execute(select(model).filter_by(**key))
    return result.scalar_one_or_none()


async def upsert(
    session: AsyncSession,
    model: type[ModelT],
    key: dict[str, Any],
    *,
    create: dict[str, Any] | None = None,
    update: dict[str, Any] | None = None,
) -> tuple[ModelT, bool]:
    """
    按唯一键查找记录，不存在则创建，存在则更新.

    插入使用 INSERT ... ON CONFLICT DO NOTHING：并发首次写入同一唯一键时，
    后到的一方不会报错，而是读取已存在的记录并按 update 更新。

    Args:
        session: 数据库会话
        model: 模型类，key 中的字段必须构成唯一约束
        key: 唯一键字段及其值
        create: 创建时额外写入的字段
        update: 已存在时要覆盖的字段，值为 None 的字段保留原值；
            不传则只查找不修改

    Returns:
        (记录, 是否新建)
    """
    row = await _find(session, model, key)
    created = False

    if row is None:
        # 通过模型实例取得默认值（created_at 等）
        values = model(**{**key, **(create or {})}).model_dump(exclude={"id"})
        stmt = (
            sqlite_insert(model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=list(key))
        )
        result = await session.execute(stmt)
        created = result.rowcount == 1

        row = await _find(session, model, key)
        if row is None:
            msg = f"{model.__name__} 写入后未找到: {key}"
            raise RuntimeError(msg)
        if created:
            return row, True

    if update:
        for field, value in update.items():
            if value is not None:
                setattr(row, field, value)
        await session.flush()

    return row, created
