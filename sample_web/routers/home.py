"""Демонстрационные страницы: текущий пользователь и создание встречи."""

from datetime import datetime

from dateutil.relativedelta import relativedelta
from fastapi import APIRouter, Depends

from sample_web.config import SampleSettings, get_sample_settings
from sample_web.dependencies import get_zoom_api
from sample_web.exceptions import ZoomUpstreamError
from zoomclient import Meeting, MeetingRequest, Recurrence, User, ZoomAPI
from zoomclient.models import Err
from zoomclient.utils import to_zoom_utc_format

router = APIRouter(tags=["Home"])


def build_test_meeting(now: datetime | None = None) -> MeetingRequest:
    """Еженедельная встреча по понедельникам и средам на ближайшие 4 месяца."""
    now = now or datetime.now()
    end = (now + relativedelta(months=4)).replace(hour=0, minute=0, second=0, microsecond=0)
    return MeetingRequest(
        topic="Test-Meeting",
        start_time=now.strftime("%Y-%m-%dT%H:%M:%S"),
        duration=60,
        agenda="banner-agenda-link",
        password="123456",
        recurrence=Recurrence(
            type=2,
            repeat_interval=1,
            weekly_days="2,4",
            end_date_time=to_zoom_utc_format(end),
        ),
    )


@router.get("/", response_model=User)
def index(zoom: ZoomAPI = Depends(get_zoom_api)) -> User:
    """Профиль владельца приложения."""
    result = zoom.get_user("me")
    if isinstance(result, Err):
        raise ZoomUpstreamError("get_user", result)
    return result.value


@router.get("/privacy", response_model=Meeting)
def privacy(
    zoom: ZoomAPI = Depends(get_zoom_api),
    settings: SampleSettings = Depends(get_sample_settings),
) -> Meeting:
    """Создание тестовой повторяющейся встречи."""
    result = zoom.create_meeting_for_user(build_test_meeting(), settings.meeting_host)
    if isinstance(result, Err):
        raise ZoomUpstreamError("create_meeting_for_user", result)
    return result.value
