"""
Менеджер токенов для Zoom API (Server-to-Server OAuth).

Токен хранится в кэше в виде готового значения заголовка Authorization
("{token_type} {access_token}") с абсолютным и скользящим сроком жизни.
"""

import httpx

from zoomclient.config.settings import ZoomConfig, ZoomSettings
from zoomclient.logger import get_logger, mask_secret

from .cache import CacheEntryOptions, MemoryTokenCache, TokenCache
from .exceptions import ZoomAuthenticationError

logger = get_logger("token_manager")


class TokenManager:
    """
    Получение и кэширование токена доступа для одного аккаунта.

    Единственной блокировки нет: параллельные вызовы при промахе кэша могут
    запросить токен одновременно, Zoom выдает токен повторно без ошибок.
    """

    def __init__(
        self,
        config: ZoomConfig,
        settings: ZoomSettings | None = None,
        cache: TokenCache | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.config = config
        self.settings = settings or ZoomSettings()
        self.cache = cache if cache is not None else MemoryTokenCache()
        self._client = http_client or httpx.Client(timeout=self.settings.timeout)
        self._owns_client = http_client is None
        self.cache_options = CacheEntryOptions(
            absolute_ttl=self.settings.token_absolute_ttl,
            sliding_ttl=self.settings.token_sliding_ttl,
        )

    @property
    def cache_key(self) -> str:
        return f"{self.config.account_id}:{self.config.client_id}"

    @property
    def token_url(self) -> str:
        return f"{self.settings.api_url.rstrip('/')}/{self.settings.token_path.lstrip('/')}"

    def get_token(self) -> str:
        """
        Значение заголовка Authorization для текущего аккаунта.

        Returns:
            Строка вида "bearer eyJ..."

        Raises:
            ZoomAuthenticationError: если токен получить не удалось
        """
        token = self.cache.try_get(self.cache_key)
        if token:
            logger.debug(f"Используем кэшированный токен для аккаунта: {self.config.account}")
            return token

        token = self._fetch_token()
        self.cache.set(self.cache_key, token, self.cache_options)
        return token

    def _fetch_token(self) -> str:
        """Запрос токена с grant_type=account_credentials и HTTP Basic аутентификацией."""
        logger.info(f"Получение токена для аккаунта: {self.config.account}")

        try:
            response = self._client.post(
                self.token_url,
                auth=httpx.BasicAuth(self.config.client_id, self.config.client_secret),
                data={
                    "grant_type": "account_credentials",
                    "account_id": self.config.account_id,
                },
            )
        except httpx.RequestError as e:
            error_type = type(e).__name__
            logger.warning(f"Сетевая ошибка при получении токена для {self.config.account} ({error_type}): {e}")
            raise ZoomAuthenticationError(f"Ошибка сетевого запроса токена: {e}") from e

        if response.status_code != 200:
            logger.warning(
                f"Ошибка получения токена для аккаунта {self.config.account}: "
                f"{response.status_code} - {response.text}"
            )
            raise ZoomAuthenticationError(f"Ошибка получения токена: {response.status_code} - {response.text}")

        try:
            token_data = response.json()
        except ValueError as e:
            raise ZoomAuthenticationError(f"Некорректный ответ сервера авторизации: {e}") from e

        access_token = token_data.get("access_token")
        if not access_token:
            logger.warning(f"Токен не найден в ответе API для аккаунта {self.config.account}")
            raise ZoomAuthenticationError("Токен не найден в ответе API")

        token_type = token_data.get("token_type") or "bearer"
        logger.info(
            f"Токен получен для аккаунта {self.config.account} "
            f"({mask_secret(access_token)}, истекает через {token_data.get('expires_in', 'n/a')} секунд)"
        )
        return f"{token_type} {access_token}"

    def invalidate_token(self) -> None:
        """Удаление токена из кэша (например, после ответа 401)."""
        logger.debug(f"Инвалидация токена для аккаунта: {self.config.account}")
        self.cache.remove(self.cache_key)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
