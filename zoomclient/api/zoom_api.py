import mimetypes
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from zoomclient.config.settings import ZoomConfig, ZoomSettings
from zoomclient.logger import get_logger
from zoomclient.models import (
    EndAction,
    Meeting,
    MeetingRequest,
    Participant,
    PlanUsage,
    User,
    UserInfo,
    UserRequest,
    UserUpdate,
    ZoomPage,
)
from zoomclient.models.result import Err, ErrorKind, Ok, PagedResult, Result
from zoomclient.utils import RawSegment, build_path, default_range, encode_meeting_uuid, to_zoom_utc_format

from .cache import TokenCache, build_token_cache
from .exceptions import ZoomAuthenticationError
from .rate_limit import RateLimit, delay_for
from .token_manager import TokenManager

logger = get_logger("zoom_api")

DateParam = datetime | str | None


class ZoomAPI:
    """
    Класс для работы с Zoom API.

    Каждый метод выполняет запрос синхронно, после запроса выдерживает
    задержку своего класса rate limit и возвращает Ok(значение) либо Err.
    Методы-списки возвращают PagedResult: при ошибке на очередной странице
    цикл останавливается, накопленные элементы сохраняются, ошибка - в error.
    """

    def __init__(
        self,
        config: ZoomConfig,
        settings: ZoomSettings | None = None,
        cache: TokenCache | None = None,
        http_client: httpx.Client | None = None,
        token_manager: TokenManager | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Инициализация API клиента."""
        self.config = config
        self.settings = settings or ZoomSettings()
        self._client = http_client or httpx.Client(timeout=self.settings.timeout)
        self._owns_client = http_client is None
        self._sleep = sleep
        if token_manager is None:
            token_manager = TokenManager(
                config,
                settings=self.settings,
                cache=cache if cache is not None else build_token_cache(self.settings),
                http_client=self._client,
            )
        self.token_manager = token_manager

    @classmethod
    def from_settings(cls, settings: ZoomSettings | None = None, **kwargs) -> "ZoomAPI":
        """Клиент с учетными данными из переменных окружения ZOOM_*."""
        settings = settings or ZoomSettings()
        return cls(settings.to_config(), settings=settings, **kwargs)

    def __enter__(self) -> "ZoomAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def get_access_token(self) -> str:
        """Значение заголовка Authorization (из кэша или новый токен)."""
        return self.token_manager.get_token()

    # ------------------------------------------------------------------
    # Выполнение запросов
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _download_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.settings.api_url.rstrip('/')}/{url.lstrip('/')}"

    def _throttle(self, rate_limit: RateLimit) -> None:
        delay = delay_for(rate_limit, self.settings)
        if delay > 0:
            self._sleep(delay)

    def _authorization(self, name: str) -> str | Err:
        try:
            return self.token_manager.get_token()
        except ZoomAuthenticationError as e:
            logger.warning(f"ZoomAPI.{name}: не удалось получить access token: {e}")
            return Err(ErrorKind.AUTHENTICATION, str(e))

    def _status_error(self, name: str, response: httpx.Response) -> Err:
        logger.warning(f"ZoomAPI.{name} returned {response.status_code} - {response.reason_phrase}")
        if response.status_code == 401:
            self.token_manager.invalidate_token()
        return Err(ErrorKind.STATUS, response.reason_phrase, status_code=response.status_code)

    def _send(
        self,
        name: str,
        method: str,
        url: str,
        *,
        expected: int,
        rate_limit: RateLimit,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        follow_redirects: bool = False,
    ) -> httpx.Response | Err:
        """Запрос с токеном, задержкой rate limit и проверкой статуса."""
        authorization = self._authorization(name)
        if isinstance(authorization, Err):
            return authorization

        try:
            response = self._client.request(
                method,
                url,
                headers={"Authorization": authorization},
                params=params,
                json=json,
                files=files,
                follow_redirects=follow_redirects,
            )
        except httpx.RequestError as e:
            error_type = type(e).__name__
            logger.warning(f"ZoomAPI.{name} returned no response")
            logger.warning(f"ErrorMessage: {e}")
            logger.warning(f"ErrorException: {error_type}")
            return Err(ErrorKind.TRANSPORT, f"{error_type}: {e}")
        finally:
            self._throttle(rate_limit)

        remaining = response.headers.get("x-ratelimit-remaining")
        if remaining is not None:
            logger.debug(f"ZoomAPI.{name}: X-RateLimit-Remaining={remaining}")

        if response.status_code != expected:
            return self._status_error(name, response)
        return response

    def _decode(self, name: str, response: httpx.Response, model: Any) -> Result:
        try:
            value = TypeAdapter(model).validate_json(response.content)
        except ValidationError as e:
            logger.warning(f"ZoomAPI.{name}: не удалось разобрать ответ: {e.error_count()} ошибок")
            logger.debug(f"Сырые данные от Zoom API ({name}): {response.text[:2000]}")
            return Err(ErrorKind.DECODE, str(e), status_code=response.status_code)
        return Ok(value)

    def _call(
        self,
        name: str,
        method: str,
        path: str,
        *,
        expected: int,
        rate_limit: RateLimit,
        model: Any = None,
        **request_kwargs: Any,
    ) -> Result:
        """Запрос к ресурсу /v2. Без model успех возвращается как Ok(True)."""
        outcome = self._send(
            name,
            method,
            self._url(path),
            expected=expected,
            rate_limit=rate_limit,
            **request_kwargs,
        )
        if isinstance(outcome, Err):
            return outcome
        if model is None:
            return Ok(True)
        return self._decode(name, outcome, model)

    def _paginate_by_page_number(
        self,
        name: str,
        path: str,
        model: type,
        params: dict[str, Any],
        rate_limit: RateLimit = RateLimit.MEDIUM,
    ) -> PagedResult:
        """Постраничный обход: page_number от 1 до page_count из ответа."""
        result: PagedResult = PagedResult()
        page = 0
        pages = 1

        while page < pages:
            page += 1
            outcome = self._call(
                f"{name} pg{page}",
                "GET",
                path,
                expected=200,
                rate_limit=rate_limit,
                model=ZoomPage[model],
                params={**params, "page_size": self.settings.page_size, "page_number": page},
            )
            if isinstance(outcome, Err):
                result.error = outcome
                break

            result.items.extend(outcome.value.results)
            result.pages += 1
            pages = outcome.value.page_count

        return result

    def _paginate_by_token(
        self,
        name: str,
        path: str,
        model: type,
        params: dict[str, Any],
        rate_limit: RateLimit = RateLimit.MEDIUM,
    ) -> PagedResult:
        """Обход по next_page_token; первый запрос идет без токена."""
        result: PagedResult = PagedResult()
        next_page_token = ""

        while True:
            page_params = dict(params)
            if next_page_token:
                page_params["next_page_token"] = next_page_token

            outcome = self._call(
                name,
                "GET",
                path,
                expected=200,
                rate_limit=rate_limit,
                model=ZoomPage[model],
                params=page_params,
            )
            if isinstance(outcome, Err):
                result.error = outcome
                break

            result.items.extend(outcome.value.results)
            result.pages += 1
            if not outcome.value.has_next_token:
                break
            next_page_token = outcome.value.next_page_token

        return result

    @staticmethod
    def _date_range(from_date: DateParam, to_date: DateParam, **window: int) -> tuple[str, str]:
        default_from, default_to = default_range(**window)

        def _format(value: DateParam, default: str) -> str:
            if value is None:
                return default
            if isinstance(value, datetime):
                return to_zoom_utc_format(value)
            return value

        return _format(from_date, default_from), _format(to_date, default_to)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> Result[User]:
        """Пользователь по id или email ("me" - владелец приложения)."""
        return self._call(
            "get_user",
            "GET",
            build_path("users/{user_id}", user_id=user_id),
            expected=200,
            rate_limit=RateLimit.LIGHT,
            model=User,
        )

    def get_users(self, status: str = "active") -> PagedResult[User]:
        """
        Все пользователи аккаунта с указанным статусом.

        Args:
            status: "active", "inactive" или "pending"
        """
        return self._paginate_by_page_number("get_users", "users", User, {"status": status})

    def create_user(self, user_request: UserRequest) -> Result[UserInfo]:
        """Создание пользователя. В ответе UserInfo с id нового пользователя."""
        return self._call(
            "create_user",
            "POST",
            "users",
            expected=201,
            rate_limit=RateLimit.LIGHT,
            model=UserInfo,
            json=user_request.to_payload(),
        )

    def update_user_profile(self, user_id: str, profile_changes: UserUpdate) -> Result[bool]:
        """Изменение профиля; отправляются только заполненные поля."""
        return self._call(
            "update_user_profile",
            "PATCH",
            build_path("users/{user_id}", user_id=user_id),
            expected=204,
            rate_limit=RateLimit.LIGHT,
            json=profile_changes.to_payload(),
        )

    def upload_profile_picture(self, user_id: str, image_path: str | Path) -> Result[bool]:
        """Загрузка фотографии профиля (multipart, поле pic_file)."""
        image_path = Path(image_path)
        if not user_id or not image_path.is_file():
            logger.warning(f"ZoomAPI.upload_profile_picture: нет user_id или файла {image_path}")
            return Err(ErrorKind.INVALID_ARGUMENT, f"user_id='{user_id}', image_path='{image_path}'")

        content_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"
        with open(image_path, "rb") as f:
            return self._call(
                "upload_profile_picture",
                "POST",
                build_path("users/{user_id}/picture", user_id=user_id),
                expected=201,
                rate_limit=RateLimit.MEDIUM,
                files={"pic_file": (image_path.name, f, content_type)},
            )

    # ------------------------------------------------------------------
    # Meetings
    # ------------------------------------------------------------------

    def get_meeting_details(self, meeting_id: str | int, occurrence_id: str | None = None) -> Result[Meeting]:
        params = {}
        if occurrence_id:
            params["occurrence_id"] = occurrence_id

        return self._call(
            "get_meeting_details",
            "GET",
            build_path("meetings/{meeting_id}", meeting_id=meeting_id),
            expected=200,
            rate_limit=RateLimit.LIGHT,
            model=Meeting,
            params=params,
        )

    def get_meetings_for_user(self, user_id: str, meeting_type: str = "upcoming") -> PagedResult[Meeting]:
        """
        Встречи пользователя.

        Args:
            user_id: id или email пользователя
            meeting_type: "scheduled", "live", "upcoming", "upcoming_meetings", "previous_meetings"
        """
        return self._paginate_by_page_number(
            f"get_meetings_for_user '{user_id}'",
            build_path("users/{user_id}/meetings", user_id=user_id),
            Meeting,
            {"type": meeting_type},
        )

    def get_past_meeting_instances(self, meeting_id: str | int) -> Result[list[Meeting]]:
        """Завершенные экземпляры встречи."""
        outcome = self._call(
            f"get_past_meeting_instances '{meeting_id}'",
            "GET",
            build_path("past_meetings/{meeting_id}/instances", meeting_id=meeting_id),
            expected=200,
            rate_limit=RateLimit.MEDIUM,
            model=ZoomPage[Meeting],
        )
        if isinstance(outcome, Err):
            return outcome
        return Ok(outcome.value.results)

    def get_past_meeting_details(self, meeting_uuid: str) -> Result[Meeting]:
        return self._call(
            f"get_past_meeting_details '{meeting_uuid}'",
            "GET",
            build_path("past_meetings/{uuid}", uuid=RawSegment(encode_meeting_uuid(meeting_uuid))),
            expected=200,
            rate_limit=RateLimit.LIGHT,
            model=Meeting,
        )

    def create_meeting_for_user(self, meeting: MeetingRequest, user_id: str) -> Result[Meeting]:
        payload = meeting.to_payload()
        logger.debug(f"Create meeting for user '{user_id}' JSON: {payload}")

        return self._call(
            f"create_meeting_for_user '{user_id}'",
            "POST",
            build_path("users/{user_id}/meetings", user_id=user_id),
            expected=201,
            rate_limit=RateLimit.MEDIUM,
            model=Meeting,
            json=payload,
        )

    def end_meeting(self, meeting_id: str | int) -> Result[bool]:
        return self._call(
            f"end_meeting '{meeting_id}'",
            "PUT",
            build_path("meetings/{meeting_id}/status", meeting_id=meeting_id),
            expected=204,
            rate_limit=RateLimit.LIGHT,
            json=EndAction().to_payload(),
        )

    def delete_meeting(
        self,
        meeting_id: str | int,
        occurrence_id: str | None = None,
        send_reminder: bool = False,
    ) -> Result[bool]:
        """
        Удаление встречи или одного ее повторения.

        Args:
            meeting_id: id встречи
            occurrence_id: id повторения; пустое значение - удаляется вся встреча
            send_reminder: уведомить хостов об удалении
        """
        params = {"schedule_for_reminder": "true" if send_reminder else "false"}
        if occurrence_id:
            params["occurrence_id"] = occurrence_id

        return self._call(
            f"delete_meeting '{meeting_id}'",
            "DELETE",
            build_path("meetings/{meeting_id}", meeting_id=meeting_id),
            expected=204,
            rate_limit=RateLimit.LIGHT,
            params=params,
        )

    # ------------------------------------------------------------------
    # Cloud recordings
    # ------------------------------------------------------------------

    def get_cloud_recordings_for_user(
        self,
        user_id: str,
        from_date: DateParam = None,
        to_date: DateParam = None,
    ) -> PagedResult[Meeting]:
        """Облачные записи пользователя (по умолчанию за последние 3 месяца)."""
        date_from, date_to = self._date_range(from_date, to_date, months=3)
        return self._paginate_by_page_number(
            f"get_cloud_recordings_for_user '{user_id}'",
            build_path("users/{user_id}/recordings", user_id=user_id),
            Meeting,
            {"from": date_from, "to": date_to},
        )

    def get_cloud_recordings_for_account(
        self,
        account_id: str = "me",
        from_date: DateParam = None,
        to_date: DateParam = None,
    ) -> PagedResult[Meeting]:
        """Облачные записи всего аккаунта (по умолчанию за последние 7 дней)."""
        date_from, date_to = self._date_range(from_date, to_date, days=7)
        return self._paginate_by_token(
            f"get_cloud_recordings_for_account '{account_id}'",
            build_path("accounts/{account_id}/recordings", account_id=account_id),
            Meeting,
            {"page_size": self.settings.page_size, "from": date_from, "to": date_to},
        )

    def download_recording(self, url: str) -> Result[bytes]:
        """Скачивание файла записи целиком в память."""
        outcome = self._send(
            "download_recording",
            "GET",
            self._download_url(url),
            expected=200,
            rate_limit=RateLimit.NONE,
            follow_redirects=True,
        )
        if isinstance(outcome, Err):
            return outcome
        return Ok(outcome.content)

    def download_recording_stream(self, url: str, save_to_path: str | Path) -> Result[Path]:
        """Скачивание файла записи потоком сразу на диск (предпочтительный вариант)."""
        save_to_path = Path(save_to_path)
        authorization = self._authorization("download_recording_stream")
        if isinstance(authorization, Err):
            return authorization

        file_created = False
        try:
            with self._client.stream(
                "GET",
                self._download_url(url),
                headers={"Authorization": authorization},
                follow_redirects=True,
            ) as response:
                if response.status_code != 200:
                    return self._status_error("download_recording_stream", response)

                save_to_path.parent.mkdir(parents=True, exist_ok=True)
                written = 0
                with open(save_to_path, "wb") as f:
                    file_created = True
                    for chunk in response.iter_bytes(chunk_size=self.settings.download_chunk_size):
                        f.write(chunk)
                        written += len(chunk)
        except httpx.RequestError as e:
            error_type = type(e).__name__
            logger.warning("ZoomAPI.download_recording_stream returned no response")
            logger.warning(f"ErrorMessage: {e}")
            logger.warning(f"ErrorException: {error_type}")
            self._remove_partial_file(save_to_path, file_created)
            return Err(ErrorKind.TRANSPORT, f"{error_type}: {e}")
        except OSError as e:
            logger.warning(f"ZoomAPI.download_recording_stream: не удалось записать файл {save_to_path}: {e}")
            self._remove_partial_file(save_to_path, file_created)
            return Err(ErrorKind.INVALID_ARGUMENT, f"{type(e).__name__}: {e}")

        logger.info(f"Запись сохранена: {save_to_path} ({written} байт)")
        return Ok(save_to_path)

    @staticmethod
    def _remove_partial_file(path: Path, file_created: bool) -> None:
        if file_created and path.exists():
            path.unlink()
            logger.debug(f"Удален неполный файл: {path}")

    def delete_recording(self, meeting_id: str, recording_id: str) -> Result[bool]:
        """Перемещение файла записи в корзину."""
        return self._call(
            f"delete_recording meetingId '{meeting_id}' recordingId '{recording_id}'",
            "DELETE",
            build_path(
                "meetings/{meeting_id}/recordings/{recording_id}",
                meeting_id=RawSegment(encode_meeting_uuid(str(meeting_id))),
                recording_id=recording_id,
            ),
            expected=204,
            rate_limit=RateLimit.LIGHT,
            params={"action": "trash"},
        )

    # ------------------------------------------------------------------
    # Billing & reports
    # ------------------------------------------------------------------

    def get_plan_usage(self) -> Result[PlanUsage]:
        return self._call(
            "get_plan_usage",
            "GET",
            build_path("accounts/{account_id}/plans/usage", account_id="me"),
            expected=200,
            rate_limit=RateLimit.HEAVY,
            model=PlanUsage,
        )

    def get_participant_report(self, meeting_id: str | int) -> PagedResult[Participant]:
        """Отчет об участниках встречи (аналог Active Host Report)."""
        return self._paginate_by_token(
            f"get_participant_report '{meeting_id}'",
            build_path(
                "report/meetings/{meeting_id}/participants",
                meeting_id=RawSegment(encode_meeting_uuid(str(meeting_id))),
            ),
            Participant,
            {"page_size": self.settings.page_size},
            rate_limit=RateLimit.HEAVY,
        )
