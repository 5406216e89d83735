"""Zoom reports"""

from pydantic import BaseModel

from .common import ZOOM_MODEL_CONFIG


class Participant(BaseModel):
    """Участник встречи из отчета GET /report/meetings/{meetingId}/participants."""

    model_config = ZOOM_MODEL_CONFIG

    id: str | None = None
    user_id: str | None = None
    participant_user_id: str | None = None
    name: str | None = None
    user_email: str | None = None
    join_time: str | None = None
    leave_time: str | None = None
    duration: int | None = None
    attentiveness_score: str | None = None
    failover: bool | None = None
    status: str | None = None
    customer_key: str | None = None
