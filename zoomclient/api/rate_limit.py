"""Фиксированные задержки после вызовов Zoom API"""

from enum import Enum

from zoomclient.config.settings import ZoomSettings


class RateLimit(Enum):
    """Классы rate limit Zoom API (см. документацию Zoom: Light, Medium, Heavy)."""

    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


def delay_for(rate_limit: RateLimit, settings: ZoomSettings) -> float:
    """Задержка в секундах после запроса указанного класса."""
    if rate_limit is RateLimit.LIGHT:
        return settings.rate_limit_light
    if rate_limit is RateLimit.MEDIUM:
        return settings.rate_limit_medium
    if rate_limit is RateLimit.HEAVY:
        return settings.rate_limit_heavy
    return 0.0
