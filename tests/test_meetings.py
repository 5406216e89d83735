import json

import httpx
import pytest
from conftest import query

from zoomclient.api.zoom_api import ZoomAPI
from zoomclient.models import ErrorKind, MeetingRequest, Ok, Recurrence

MEETING = {
    "uuid": "aDYlohsHRtCd4ii1uC2+hA==",
    "id": 85746065432,
    "host_id": "KDcuGIm1QgePTO8WbOqwIQ",
    "topic": "Weekly sync",
    "type": 8,
    "start_time": "2024-05-13T15:00:00Z",
    "duration": 60,
    "timezone": "UTC",
    "join_url": "https://zoom.us/j/85746065432",
    "recurrence": {"type": 2, "repeat_interval": 1, "weekly_days": "2,4"},
    "settings": {"host_video": True, "waiting_room": False},
    "occurrences": [{"occurrence_id": "1715612400000", "start_time": "2024-05-13T15:00:00Z", "status": "available"}],
}


def meetings_page(page_number: int, page_count: int, ids: list[int]) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "page_count": page_count,
            "page_number": page_number,
            "page_size": 2,
            "total_records": 3,
            "meetings": [{"id": meeting_id, "topic": f"Meeting {meeting_id}"} for meeting_id in ids],
        },
    )


class TestMeetingDetails:

    def test_returns_meeting(self, zoom_api, fake_zoom):
        fake_zoom.add("GET", "/v2/meetings/85746065432", httpx.Response(200, json=MEETING))

        result = zoom_api.get_meeting_details(85746065432)

        meeting = result.value
        assert meeting.topic == "Weekly sync"
        assert meeting.recurrence.weekly_days == "2,4"
        assert meeting.settings.host_video is True
        assert meeting.occurrences[0].occurrence_id == "1715612400000"
        assert "occurrence_id" not in query(fake_zoom.api_requests[0])

    @pytest.mark.parametrize("occurrence_id", [None, ""])
    def test_empty_occurrence_is_omitted(self, zoom_api, fake_zoom, occurrence_id):
        fake_zoom.add("GET", "/v2/meetings/1", httpx.Response(200, json=MEETING))
        zoom_api.get_meeting_details("1", occurrence_id)
        assert fake_zoom.api_requests[0].url.query == b""

    def test_occurrence_is_sent(self, zoom_api, fake_zoom):
        fake_zoom.add("GET", "/v2/meetings/1", httpx.Response(200, json=MEETING))
        zoom_api.get_meeting_details("1", "1715612400000")
        assert query(fake_zoom.api_requests[0]) == {"occurrence_id": "1715612400000"}


class TestMeetingsForUser:

    def test_pages_through_upcoming_meetings(self, zoom_api, fake_zoom):
        fake_zoom.add(
            "GET",
            "/v2/users/u1/meetings",
            meetings_page(1, 2, [1, 2]),
            meetings_page(2, 2, [3]),
        )

        result = zoom_api.get_meetings_for_user("u1")

        assert [meeting.id for meeting in result] == [1, 2, 3]
        params = [query(r) for r in fake_zoom.api_requests]
        assert [p["type"] for p in params] == ["upcoming", "upcoming"]
        assert [p["page_number"] for p in params] == ["1", "2"]

    def test_meeting_type(self, zoom_api, fake_zoom):
        fake_zoom.add("GET", "/v2/users/u1/meetings", meetings_page(1, 1, [1]))
        zoom_api.get_meetings_for_user("u1", "scheduled")
        assert query(fake_zoom.api_requests[0])["type"] == "scheduled"


class TestPastMeetings:

    def test_instances(self, zoom_api, fake_zoom):
        fake_zoom.add(
            "GET",
            "/v2/past_meetings/85746065432/instances",
            httpx.Response(
                200,
                json={
                    "meetings": [
                        {"uuid": "Bznyg8KZTdCVbQxvS/oZ7w==", "start_time": "2024-05-06T15:00:00Z"},
                        {"uuid": "aDYlohsHRtCd4ii1uC2+hA==", "start_time": "2024-05-13T15:00:00Z"},
                    ]
                },
            ),
        )

        result = zoom_api.get_past_meeting_instances(85746065432)

        assert [m.uuid for m in result.value] == ["Bznyg8KZTdCVbQxvS/oZ7w==", "aDYlohsHRtCd4ii1uC2+hA=="]

    def test_instances_failure(self, zoom_api, fake_zoom):
        fake_zoom.add("GET", "/v2/past_meetings/1/instances", httpx.Response(404))
        assert zoom_api.get_past_meeting_instances(1).kind is ErrorKind.STATUS

    def test_details_single_encodes_plain_uuid(self, zoom_api, fake_zoom):
        fake_zoom.add("GET", "/v2/past_meetings/aDYlohsHRtCd4ii1uC2%2BhA%3D%3D", httpx.Response(200, json=MEETING))
        assert zoom_api.get_past_meeting_details("aDYlohsHRtCd4ii1uC2+hA==").is_ok

    def test_details_double_encodes_slash_uuid(self, zoom_api, fake_zoom):
        fake_zoom.add("GET", "/v2/past_meetings/%252Fab%252F%252Fcd%253D%253D", httpx.Response(200, json=MEETING))
        assert zoom_api.get_past_meeting_details("/ab//cd==").is_ok


class TestMeetingChanges:

    def test_create_meeting_for_user(self, zoom_api, fake_zoom):
        fake_zoom.add("POST", "/v2/users/host%40example.com/meetings", httpx.Response(201, json=MEETING))
        request = MeetingRequest(
            topic="Weekly sync",
            start_time="2024-05-13T15:00:00",
            duration=60,
            password="123456",
            recurrence=Recurrence(type=2, repeat_interval=1, weekly_days="2,4"),
        )

        result = zoom_api.create_meeting_for_user(request, "host@example.com")

        assert result.value.join_url == "https://zoom.us/j/85746065432"
        body = json.loads(fake_zoom.api_requests[0].content)
        assert body == {
            "topic": "Weekly sync",
            "type": 8,
            "start_time": "2024-05-13T15:00:00",
            "duration": 60,
            "password": "123456",
            "recurrence": {"type": 2, "repeat_interval": 1, "weekly_days": "2,4"},
        }

    def test_end_meeting(self, zoom_api, fake_zoom):
        fake_zoom.add("PUT", "/v2/meetings/42/status", httpx.Response(204))

        assert zoom_api.end_meeting(42) == Ok(True)
        assert json.loads(fake_zoom.api_requests[0].content) == {"action": "end"}

    def test_end_meeting_failure(self, zoom_api, fake_zoom):
        fake_zoom.add("PUT", "/v2/meetings/42/status", httpx.Response(400))
        assert zoom_api.end_meeting(42).unwrap_or(False) is False

    @pytest.mark.parametrize("occurrence_id", [None, ""])
    def test_delete_meeting_omits_empty_occurrence(self, zoom_api, fake_zoom, occurrence_id):
        fake_zoom.add("DELETE", "/v2/meetings/42", httpx.Response(204))

        assert zoom_api.delete_meeting(42, occurrence_id) == Ok(True)
        assert query(fake_zoom.api_requests[0]) == {"schedule_for_reminder": "false"}

    def test_delete_meeting_occurrence_with_reminder(self, zoom_api, fake_zoom):
        fake_zoom.add("DELETE", "/v2/meetings/42", httpx.Response(204))

        zoom_api.delete_meeting(42, "1715612400000", send_reminder=True)

        assert query(fake_zoom.api_requests[0]) == {
            "schedule_for_reminder": "true",
            "occurrence_id": "1715612400000",
        }

    def test_delete_meeting_not_found(self, zoom_api, fake_zoom):
        fake_zoom.add("DELETE", "/v2/meetings/42", httpx.Response(404))
        result = zoom_api.delete_meeting(42)
        assert result.status_code == 404


class TestRateLimitDelays:

    @pytest.fixture
    def throttled_api(self, zoom_config, settings, http_client, sleeps):
        settings.rate_limit_light = 0.1
        settings.rate_limit_medium = 0.2
        settings.rate_limit_heavy = 0.5
        return ZoomAPI(zoom_config, settings=settings, http_client=http_client, sleep=sleeps.append)

    def test_light_call_sleeps_once(self, throttled_api, fake_zoom, sleeps):
        fake_zoom.add("GET", "/v2/meetings/1", httpx.Response(200, json=MEETING))
        throttled_api.get_meeting_details(1)
        assert sleeps == [0.1]

    def test_medium_sleep_per_page(self, throttled_api, fake_zoom, sleeps):
        fake_zoom.add("GET", "/v2/users/u1/meetings", meetings_page(1, 2, [1, 2]), meetings_page(2, 2, [3]))
        throttled_api.get_meetings_for_user("u1")
        assert sleeps == [0.2, 0.2]

    def test_sleeps_after_failed_call(self, throttled_api, fake_zoom, sleeps):
        fake_zoom.add("DELETE", "/v2/meetings/1", httpx.Response(500))
        throttled_api.delete_meeting(1)
        assert sleeps == [0.1]

    def test_heavy_call(self, throttled_api, fake_zoom, sleeps):
        fake_zoom.add("GET", "/v2/accounts/me/plans/usage", httpx.Response(200, json={}))
        throttled_api.get_plan_usage()
        assert sleeps == [0.5]
