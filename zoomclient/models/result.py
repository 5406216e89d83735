"""Результаты вызовов Zoom API"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Причина неуспешного вызова"""

    TRANSPORT = "transport"  # Сеть, DNS, таймаут
    STATUS = "status"  # Неожиданный HTTP статус
    DECODE = "decode"  # Тело ответа не соответствует модели
    AUTHENTICATION = "authentication"  # Не удалось получить токен
    INVALID_ARGUMENT = "invalid_argument"  # Неверные аргументы или недоступный локальный путь


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default):
        return self.value


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""
    status_code: int | None = None

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        """Поднимает исключение, соответствующее причине ошибки."""
        from zoomclient.api.exceptions import error_to_exception

        raise error_to_exception(self)

    def unwrap_or(self, default):
        return default

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value}: {self.status_code} {self.message}".rstrip()
        return f"{self.kind.value}: {self.message}".rstrip(": ")


Result = Ok[T] | Err


@dataclass
class PagedResult(Generic[T]):
    """
    Элементы всех успешно полученных страниц.

    Если страница не получена, цикл останавливается: items содержит
    накопленное до ошибки, error описывает неудачный запрос.
    """

    items: list[T] = field(default_factory=list)
    pages: int = 0
    error: Err | None = None

    @property
    def is_complete(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]
