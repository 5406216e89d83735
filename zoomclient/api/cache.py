"""
Кэш токенов доступа.

TokenManager зависит только от протокола TokenCache. В комплекте две
реализации: MemoryTokenCache (в пределах процесса) и RedisTokenCache
(общий токен для нескольких процессов/воркеров).
"""

import json
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import redis

from zoomclient.config.settings import ZoomSettings
from zoomclient.logger import get_logger

logger = get_logger("token_cache")


@dataclass(frozen=True)
class CacheEntryOptions:
    """
    Политика истечения записи.

    absolute_ttl: запись недоступна через absolute_ttl секунд после записи.
    sliding_ttl: запись недоступна, если к ней не обращались sliding_ttl
        секунд; обращение продлевает срок, но не дальше absolute_ttl.
    """

    absolute_ttl: float
    sliding_ttl: float | None = None


class TokenCache(Protocol):
    def try_get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, options: CacheEntryOptions) -> None: ...

    def remove(self, key: str) -> None: ...


@dataclass
class _MemoryEntry:
    value: str
    absolute_deadline: float
    sliding_ttl: float | None
    last_access: float

    def deadline(self) -> float:
        if self.sliding_ttl is None:
            return self.absolute_deadline
        return min(self.absolute_deadline, self.last_access + self.sliding_ttl)


class MemoryTokenCache:
    """Кэш в памяти процесса. Проверка и продление записи выполняются под блокировкой."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, _MemoryEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def try_get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            now = self._clock()
            if now >= entry.deadline():
                del self._entries[key]
                logger.debug(f"Запись кэша истекла: {key}")
                return None

            entry.last_access = now
            return entry.value

    def set(self, key: str, value: str, options: CacheEntryOptions) -> None:
        with self._lock:
            now = self._clock()
            self._entries[key] = _MemoryEntry(
                value=value,
                absolute_deadline=now + options.absolute_ttl,
                sliding_ttl=options.sliding_ttl,
                last_access=now,
            )

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


class RedisTokenCache:
    """
    Кэш в Redis.

    Значение хранится вместе с абсолютным сроком; TTL ключа в Redis играет
    роль скользящего срока и продлевается при каждом чтении.
    """

    def __init__(
        self,
        redis_client,
        key_prefix: str = "zoom:token:",
        clock: Callable[[], float] = time.time,
    ):
        self.redis = redis_client
        self.key_prefix = key_prefix
        self._clock = clock

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisTokenCache":
        client = redis.Redis.from_url(url, encoding="utf-8", decode_responses=True)
        return cls(client, **kwargs)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def try_get(self, key: str) -> str | None:
        redis_key = self._key(key)
        raw = self.redis.get(redis_key)
        if not raw:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.error(f"Поврежденная запись кэша токена: {redis_key}")
            self.redis.delete(redis_key)
            return None

        remaining = data["expires_at"] - self._clock()
        if remaining <= 0:
            self.redis.delete(redis_key)
            return None

        sliding_ttl = data.get("sliding_ttl")
        if sliding_ttl:
            self.redis.expire(redis_key, max(1, math.ceil(min(sliding_ttl, remaining))))

        return data["value"]

    def set(self, key: str, value: str, options: CacheEntryOptions) -> None:
        ttl = options.absolute_ttl
        if options.sliding_ttl:
            ttl = min(options.sliding_ttl, options.absolute_ttl)

        payload = {
            "value": value,
            "expires_at": self._clock() + options.absolute_ttl,
            "sliding_ttl": options.sliding_ttl,
        }
        self.redis.set(self._key(key), json.dumps(payload), ex=max(1, math.ceil(ttl)))

    def remove(self, key: str) -> None:
        self.redis.delete(self._key(key))


def build_token_cache(settings: ZoomSettings) -> TokenCache:
    """Redis, если задан ZOOM_TOKEN_CACHE_URL, иначе кэш в памяти."""
    if settings.token_cache_url:
        logger.info("Используется Redis кэш токенов")
        return RedisTokenCache.from_url(settings.token_cache_url)
    return MemoryTokenCache()
