"""Zoom billing: plan usage report"""

from pydantic import BaseModel, Field

from .common import ZOOM_MODEL_CONFIG


class PlanUsageDetail(BaseModel):
    model_config = ZOOM_MODEL_CONFIG

    type: str | None = None
    hosts: int | None = None
    usage: int | None = None
    pending: int | None = None


class PlanRecording(BaseModel):
    """Использование облачного хранилища."""

    model_config = ZOOM_MODEL_CONFIG

    type: str | None = None
    free_storage: str | None = None
    free_storage_usage: str | None = None
    plan_storage: str | None = None
    plan_storage_usage: str | None = None
    plan_storage_exceed: str | None = None


class PlanUsage(BaseModel):
    """Ответ GET /accounts/{accountId}/plans/usage."""

    model_config = ZOOM_MODEL_CONFIG

    plan_base: list[PlanUsageDetail] = Field(default_factory=list)
    plan_large_meeting: list[PlanUsageDetail] = Field(default_factory=list)
    plan_zoom_rooms: list[PlanUsageDetail] = Field(default_factory=list)
    plan_webinar: list[PlanUsageDetail] = Field(default_factory=list)
    plan_zoom_events: list[PlanUsageDetail] = Field(default_factory=list)
    plan_recording: PlanRecording | None = None
    plan_united: PlanUsageDetail | None = None

    @property
    def licensed_hosts(self) -> int:
        """Количество хостов на базовых планах."""
        return sum(detail.hosts or 0 for detail in self.plan_base)
