"""应用配置管理."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置（环境变量）."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 数据库
    database_url: str = "sqlite+aiosqlite:///./hubreader.db"

    # RSSHub 聚合服务
    rsshub_base_url: str = "https://rsshub.app"
    fetch_timeout_seconds: float = 30.0

    # 会话
    session_secret: str = "change-me-in-production"
    session_max_age: int = 30 * 24 * 3600
    session_https_only: bool = False

    # 阅读
    default_folder: str = "未分类"
    unread_limit: int = 50

    # 应用
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """获取应用配置（带缓存）."""
    return Settings()
