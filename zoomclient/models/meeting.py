"""Zoom meetings and cloud recordings"""

from pydantic import BaseModel, Field

from .common import REQUEST_MODEL_CONFIG, ZOOM_MODEL_CONFIG


class Recurrence(BaseModel):
    """Повторение встречи (type: 1 - daily, 2 - weekly, 3 - monthly)."""

    model_config = ZOOM_MODEL_CONFIG

    type: int
    repeat_interval: int | None = None
    weekly_days: str | None = Field(default=None, description="Дни недели через запятую, 1 - воскресенье")
    monthly_day: int | None = None
    monthly_week: int | None = None
    monthly_week_day: int | None = None
    end_times: int | None = None
    end_date_time: str | None = None


class MeetingSettings(BaseModel):
    model_config = ZOOM_MODEL_CONFIG

    host_video: bool | None = None
    participant_video: bool | None = None
    join_before_host: bool | None = None
    mute_upon_entry: bool | None = None
    waiting_room: bool | None = None
    approval_type: int | None = None
    audio: str | None = None
    auto_recording: str | None = None
    alternative_hosts: str | None = None


class Occurrence(BaseModel):
    model_config = ZOOM_MODEL_CONFIG

    occurrence_id: str
    start_time: str | None = None
    duration: int | None = None
    status: str | None = None


class RecordingFile(BaseModel):
    """Отдельный файл облачной записи."""

    model_config = ZOOM_MODEL_CONFIG

    id: str | None = None
    meeting_id: str | None = None
    recording_start: str | None = None
    recording_end: str | None = None
    file_type: str | None = None
    file_extension: str | None = None
    file_size: int | None = None
    play_url: str | None = None
    download_url: str | None = None
    status: str | None = None
    recording_type: str | None = None


class Meeting(BaseModel):
    """
    Встреча Zoom.

    Одна модель для всех ответов, которые описывают встречу: детали встречи,
    прошедшие экземпляры, созданная встреча и элемент списка облачных записей
    (в этом случае заполнены recording_files).
    """

    model_config = ZOOM_MODEL_CONFIG

    uuid: str | None = None
    id: int | None = None
    host_id: str | None = None
    host_email: str | None = None
    account_id: str | None = None
    topic: str | None = None
    type: int | None = None
    status: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    duration: int | None = None
    total_minutes: int | None = None
    participants_count: int | None = None
    timezone: str | None = None
    agenda: str | None = None
    created_at: str | None = None
    start_url: str | None = None
    join_url: str | None = None
    password: str | None = None
    pmi: str | None = None
    recurrence: Recurrence | None = None
    settings: MeetingSettings | None = None
    occurrences: list[Occurrence] = Field(default_factory=list)

    # Поля облачных записей
    total_size: int | None = None
    recording_count: int | None = None
    share_url: str | None = None
    recording_play_passcode: str | None = None
    recording_files: list[RecordingFile] = Field(default_factory=list)


class MeetingRequest(BaseModel):
    """Тело POST /users/{userId}/meetings."""

    model_config = REQUEST_MODEL_CONFIG

    topic: str
    type: int = Field(default=8, description="1 - instant, 2 - scheduled, 3 - recurring no fixed time, 8 - recurring")
    start_time: str | None = Field(default=None, description="yyyy-MM-ddTHH:mm:ss (локальное время) или с Z")
    duration: int | None = None
    timezone: str | None = None
    password: str | None = None
    agenda: str | None = None
    schedule_for: str | None = None
    recurrence: Recurrence | None = None
    settings: MeetingSettings | None = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class EndAction(BaseModel):
    """Тело PUT /meetings/{meetingId}/status."""

    model_config = REQUEST_MODEL_CONFIG

    action: str = "end"

    def to_payload(self) -> dict:
        return self.model_dump()
