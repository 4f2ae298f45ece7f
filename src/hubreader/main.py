"""hubreader 主应用入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from hubreader.api import auth, feeds, items
from hubreader.config import Settings, get_settings
from hubreader.errors import ReaderError
from hubreader.models.database import Database

# 配置日志
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理：数据库句柄由这里创建和关闭."""
    app_settings: Settings = app.state.settings

    logger.info("正在初始化数据库...")
    db = Database(app_settings.database_url)
    await db.init()
    app.state.db = db

    logger.info("hubreader 启动完成！")
    yield

    logger.info("正在关闭...")
    await db.dispose()
    logger.info("hubreader 已关闭")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def reader_error_handler(request: Request, exc: ReaderError) -> JSONResponse:
    """业务异常 -> {"error": message}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 失败: {exc.message}")
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求参数校验失败统一返回 400."""
    errors = exc.errors()
    fields = [
        ".".join(
            str(part) for part in error["loc"] if part not in ("body", "query", "path")
        )
        for error in errors
    ]
    fields = [field for field in fields if field]
    message = f"请求参数无效: {', '.join(fields)}" if fields else "请求参数无效"
    return _error_response(400, message)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """未预期的异常：记录堆栈，不向客户端暴露细节."""
    logger.exception(f"{request.method} {request.url.path} 出现未处理异常")
    return _error_response(500, "服务器内部错误")


def create_app(settings: Settings | None = None) -> FastAPI:
    """创建 FastAPI 应用."""
    app_settings = settings or get_settings()

    app = FastAPI(
        title="hubreader",
        description="RSS 阅读器 - 基于 RSSHub 的订阅、阅读与收藏",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # CORS 配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # 会话 cookie（签名，不加密），只保存 user_id
    app.add_middleware(
        SessionMiddleware,
        secret_key=app_settings.session_secret,
        session_cookie="hubreader_session",
        max_age=app_settings.session_max_age,
        same_site="lax",
        https_only=app_settings.session_https_only,
    )

    app.add_exception_handler(ReaderError, reader_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)

    # 注册路由
    app.include_router(auth.router)
    app.include_router(feeds.router)
    app.include_router(items.router)

    @app.get("/")
    async def root() -> dict:
        """根路径."""
        return {
            "name": "hubreader",
            "version": "0.1.0",
            "description": "RSS 阅读器",
        }

    @app.get("/health")
    async def health() -> dict:
        """健康检查."""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hubreader.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
