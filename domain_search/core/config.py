from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # core
    ENV: str = "dev"
    API_PREFIX: str = "/api"

    # database & redis
    # Plain strings so sqlite:/// and redis:// URLs are always accepted
    DATABASE_URL: str = "sqlite:///./data/builtwith.db"
    REDIS_URL: str = "redis://localhost:6379/0"

    # search paging
    DEFAULT_PAGE_SIZE: int = 25
    # Hard cap on page size so enrichment never scans the whole table
    MAX_PAGE_SIZE: int = 100
    OPTIONS_DEFAULT_LIMIT: int = 50

    # auth / security
    FRONTEND_ORIGIN: str | None = None
    # Explicit debug-only switch for wide-open CORS in non-prod envs
    CORS_ALLOW_ALL_ORIGINS: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
