import json
import os
from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ZOOM_API_URL = "https://api.zoom.us/"
ZOOM_BASE_URL = "https://api.zoom.us/v2/"


@dataclass(frozen=True)
class ZoomConfig:
    """Учетные данные Server-to-Server OAuth приложения Zoom"""

    account: str
    account_id: str
    client_id: str
    client_secret: str


class ZoomSettings(BaseSettings):
    """Настройки клиента Zoom API"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ZOOM_",
        case_sensitive=False,
        extra="ignore",
    )

    # Учетные данные
    account: str = Field(default="default", description="Метка аккаунта (используется в логах)")
    account_id: str = Field(default="", description="Account ID из Server-to-Server OAuth приложения")
    client_id: str = Field(default="", description="Client ID приложения")
    client_secret: str = Field(default="", description="Client secret приложения")
    config_file: str | None = Field(default=None, description="JSON файл с несколькими аккаунтами")

    # Адреса
    api_url: str = Field(default=ZOOM_API_URL, description="Корневой URL (OAuth и скачивание записей)")
    base_url: str = Field(default=ZOOM_BASE_URL, description="Версионированный URL ресурсов")
    token_path: str = Field(default="oauth/token", description="Путь эндпоинта выдачи токена")

    # HTTP
    timeout: float = Field(default=30.0, gt=0, description="Таймаут HTTP запроса в секундах")
    page_size: int = Field(default=80, ge=1, le=300, description="Размер страницы для списков")
    download_chunk_size: int = Field(default=128_000, ge=1024, description="Размер чанка при скачивании")

    # Задержки после вызова (классы rate limit Zoom), секунды
    rate_limit_light: float = Field(default=0.1, ge=0, description="Задержка для light запросов")
    rate_limit_medium: float = Field(default=0.2, ge=0, description="Задержка для medium запросов")
    rate_limit_heavy: float = Field(default=0.5, ge=0, description="Задержка для heavy запросов")

    # Кэш токена
    token_absolute_ttl: int = Field(default=55 * 60, ge=1, description="Абсолютное время жизни токена в кэше")
    token_sliding_ttl: int = Field(default=15 * 60, ge=1, description="Скользящее время жизни токена в кэше")
    token_cache_url: str | None = Field(default=None, description="Redis URL для общего кэша токенов")

    def to_config(self) -> ZoomConfig:
        """Учетные данные из переменных окружения."""
        return ZoomConfig(
            account=self.account,
            account_id=self.account_id,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )


def load_config_from_file(config_file: str) -> dict[str, ZoomConfig]:
    """Загрузка конфигураций Zoom из JSON файла"""
    if not os.path.exists(config_file):
        return {}

    with open(config_file, encoding="utf-8") as f:
        data = json.load(f)

    # Поддерживаются обе структуры: {"accounts": [...]} и {account: {...}}
    entries = data["accounts"] if "accounts" in data else list(data.values())

    configs = {}
    for account_data in entries:
        config = ZoomConfig(
            account=account_data["account"],
            account_id=account_data["account_id"],
            client_id=account_data["client_id"],
            client_secret=account_data["client_secret"],
        )
        configs[config.account] = config

    return configs


def get_config_by_account(account: str, configs: dict[str, ZoomConfig]) -> ZoomConfig:
    """Получение конфигурации по аккаунту"""
    if account not in configs:
        raise ValueError(f"Конфигурация для аккаунта {account} не найдена")
    return configs[account]


def get_settings() -> ZoomSettings:
    return ZoomSettings()
