"""Страница списка Zoom API"""

from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .common import ZOOM_MODEL_CONFIG

T = TypeVar("T")


class ZoomPage(BaseModel, Generic[T]):
    """
    Одна страница списка.

    Zoom отдает элементы под ключом конкретного ресурса (users, meetings,
    participants), поэтому results собирается из любого из них.
    Пустой или отсутствующий next_page_token означает последнюю страницу.
    """

    model_config = ZOOM_MODEL_CONFIG

    page_count: int = 0
    page_number: int | None = None
    page_size: int | None = None
    total_records: int | None = None
    next_page_token: str = ""
    results: list[T] = Field(
        default_factory=list,
        validation_alias=AliasChoices("users", "meetings", "participants", "results"),
    )

    @field_validator("next_page_token", mode="before")
    @classmethod
    def _empty_token(cls, value):
        return value or ""

    @field_validator("results", mode="before")
    @classmethod
    def _null_results(cls, value):
        return value or []

    @property
    def has_next_token(self) -> bool:
        return self.next_page_token != ""
