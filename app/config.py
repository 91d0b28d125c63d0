"""Конфигурация приложения."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Настройки приложения."""

    # Database
    DATABASE_URL: str = "sqlite:///./house_members.db"
    DATABASE_ECHO: bool = False  # True для логирования SQL-запросов

    # JWT
    SECRET_KEY: str = "secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"

    # Membership
    HOUSE_CAPACITY: int = 5  # Максимум участников в одном доме
    COUNT_EXPIRED_TOWARD_CAPACITY: bool = True  # Истёкшие участники тоже занимают место

    # Dashboard
    RECENT_INFO_LOGS_LIMIT: int = 5

    # API
    API_V1_PREFIX: str = "/api/v1"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки приложения (singleton)."""
    return Settings()
