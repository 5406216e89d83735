"""Zoom users"""

from pydantic import BaseModel, Field

from .common import REQUEST_MODEL_CONFIG, ZOOM_MODEL_CONFIG


class User(BaseModel):
    """Пользователь Zoom (GET /users/{userId}, элементы GET /users)."""

    model_config = ZOOM_MODEL_CONFIG

    id: str
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    email: str | None = None
    type: int | None = None
    role_name: str | None = None
    pmi: int | None = None
    use_pmi: bool | None = None
    personal_meeting_url: str | None = None
    timezone: str | None = None
    verified: int | None = None
    dept: str | None = None
    created_at: str | None = None
    user_created_at: str | None = None
    last_login_time: str | None = None
    last_client_version: str | None = None
    pic_url: str | None = None
    language: str | None = None
    phone_number: str | None = None
    status: str | None = None
    role_id: str | None = None
    account_id: str | None = None
    group_ids: list[str] = Field(default_factory=list)


class UserInfo(BaseModel):
    """Данные нового пользователя: тело запроса и ответ POST /users."""

    model_config = ZOOM_MODEL_CONFIG

    id: str | None = None
    email: str
    type: int = Field(default=1, description="1 - basic, 2 - licensed")
    first_name: str | None = None
    last_name: str | None = None


class UserRequest(BaseModel):
    """Тело POST /users."""

    model_config = REQUEST_MODEL_CONFIG

    action: str = Field(default="create", description="create, autoCreate, custCreate, ssoCreate")
    user_info: UserInfo

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class UserUpdate(BaseModel):
    """
    Изменения профиля пользователя (PATCH /users/{userId}).

    Заполняются только изменяемые поля, остальные не отправляются.
    """

    model_config = REQUEST_MODEL_CONFIG

    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    type: int | None = None
    pmi: int | None = None
    use_pmi: bool | None = None
    timezone: str | None = None
    language: str | None = None
    dept: str | None = None
    vanity_name: str | None = None
    host_key: str | None = None
    job_title: str | None = None
    company: str | None = None
    location: str | None = None
    phone_number: str | None = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)
