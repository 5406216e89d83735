from datetime import UTC, datetime, timedelta, timezone

import pytest

from zoomclient.utils import (
    RawSegment,
    build_path,
    default_range,
    encode_meeting_uuid,
    parse_date,
    parse_range_bound,
    to_zoom_utc_format,
)


class TestMeetingUuid:

    @pytest.mark.parametrize(
        "uuid, expected",
        [
            ("4444AAAiAAAAAiAiAiiAii==", "4444AAAiAAAAAiAiAiiAii%3D%3D"),
            ("aDYlohsHRtCd4ii1uC2+hA==", "aDYlohsHRtCd4ii1uC2%2BhA%3D%3D"),
            ("ab/cd==", "ab%2Fcd%3D%3D"),
            ("/ajXp112QmuoKj4854875==", "%252FajXp112QmuoKj4854875%253D%253D"),
            ("ab//cd", "ab%252F%252Fcd"),
        ],
    )
    def test_encoding(self, uuid, expected):
        assert encode_meeting_uuid(uuid) == expected

    def test_numeric_id_untouched(self):
        assert encode_meeting_uuid("85746065432") == "85746065432"


class TestBuildPath:

    def test_encodes_segments(self):
        assert build_path("users/{user_id}/meetings", user_id="a b@example.com") == "users/a%20b%40example.com/meetings"

    def test_raw_segment_is_not_reencoded(self):
        assert build_path("past_meetings/{uuid}", uuid=RawSegment("%252Fabc")) == "past_meetings/%252Fabc"


class TestDates:

    def test_zoom_utc_format_converts_to_utc(self):
        value = datetime(2024, 5, 13, 18, 30, 15, tzinfo=timezone(timedelta(hours=3)))
        assert to_zoom_utc_format(value) == "2024-05-13T15:30:15Z"

    def test_zoom_utc_format_drops_microseconds(self):
        assert to_zoom_utc_format(datetime(2024, 1, 1, 0, 0, 0, 999999, tzinfo=UTC)) == "2024-01-01T00:00:00Z"

    @pytest.mark.parametrize(
        "now, expected_from",
        [
            (datetime(2024, 5, 31, tzinfo=UTC), "2024-02-29T00:00:00Z"),
            (datetime(2024, 1, 15, tzinfo=UTC), "2023-10-15T00:00:00Z"),
            (datetime(2025, 1, 1, tzinfo=UTC), "2024-10-01T00:00:00Z"),
        ],
    )
    def test_default_range_months_clamps_day(self, now, expected_from):
        assert default_range(months=3, now=now) == (expected_from, to_zoom_utc_format(now))

    def test_default_range_days(self):
        now = datetime(2024, 3, 3, 12, 0, tzinfo=UTC)
        assert default_range(days=7, now=now) == ("2024-02-25T12:00:00Z", "2024-03-03T12:00:00Z")

    @pytest.mark.parametrize("raw", ["2024-12-31", "31-12-2024", "31/12/2024", "31-12-24", "31/12/24"])
    def test_parse_date_formats(self, raw):
        assert parse_date(raw) == "2024-12-31"

    def test_parse_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("yesterday")

    def test_parse_range_bound(self):
        assert parse_range_bound("2024-12-31") == datetime(2024, 12, 31, tzinfo=UTC)
        assert parse_range_bound("2024-12-31", end_of_day=True) == datetime(2024, 12, 31, 23, 59, 59, tzinfo=UTC)
