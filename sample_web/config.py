"""Конфигурация демонстрационного приложения."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SampleSettings(BaseSettings):
    """Настройки sample web приложения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SAMPLE_",
        case_sensitive=False,
        extra="ignore",
    )

    api_title: str = Field(default="Zoom Client Sample", description="Название приложения")
    api_version: str = Field(default="1.0.0", description="Версия приложения")
    meeting_host: str = Field(default="me", description="Пользователь, для которого создается тестовая встреча")

    host: str = Field(default="127.0.0.1", description="Хост сервера")
    port: int = Field(default=8000, ge=1, le=65535, description="Порт сервера")
    reload: bool = Field(default=False, description="Автоперезагрузка при изменениях")


@lru_cache
def get_sample_settings() -> SampleSettings:
    return SampleSettings()
