import logging
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    APP_ENV: str = "development"
    BASE_URL: str = "http://localhost:8000"
    DATABASE_URL: str = "sqlite:///./data/inventory.db"
    LOG_LEVEL: str = "INFO"
    DEFAULT_PAGE_SIZE: int = 50
    RECENT_ACTIVITY_LIMIT: int = 5

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

if settings.APP_ENV == "production" and settings.DATABASE_URL.startswith("sqlite"):
    logger.warning("DATABASE_URL points to SQLite in production; row locks are not enforced")
