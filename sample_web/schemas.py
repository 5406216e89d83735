"""Схемы ответов sample приложения."""

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check ответ."""

    status: str
    service: str
