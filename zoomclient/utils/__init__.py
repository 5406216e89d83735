from .date_utils import (
    ZOOM_UTC_FORMAT,
    default_range,
    parse_date,
    parse_range_bound,
    to_zoom_utc_format,
)
from .url_utils import RawSegment, build_path, encode_meeting_uuid, encode_path_segment

__all__ = [
    "ZOOM_UTC_FORMAT",
    "RawSegment",
    "build_path",
    "default_range",
    "encode_meeting_uuid",
    "encode_path_segment",
    "parse_date",
    "parse_range_bound",
    "to_zoom_utc_format",
]
