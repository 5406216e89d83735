"""Зависимости FastAPI."""

from functools import lru_cache

from zoomclient import ZoomAPI
from zoomclient.config import get_settings


@lru_cache
def get_zoom_api() -> ZoomAPI:
    """Один клиент (и один кэш токена) на процесс."""
    return ZoomAPI.from_settings(get_settings())
