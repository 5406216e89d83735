"""URL helpers for Zoom resource paths"""

from urllib.parse import quote


def encode_path_segment(value: str | int) -> str:
    """Percent-encode a single path segment (slashes included)."""
    return quote(str(value), safe="")


def encode_meeting_uuid(uuid: str) -> str:
    """
    Encode a meeting UUID for use in a path.

    Zoom requires UUIDs that begin with '/' or contain '//' to be
    double-encoded, otherwise the request hits a different resource.

    Example:
        >>> encode_meeting_uuid("/ajXp112QmuoKj4854875==")
        '%252FajXp112QmuoKj4854875%253D%253D'
    """
    encoded = encode_path_segment(uuid)
    if uuid.startswith("/") or "//" in uuid:
        return encode_path_segment(encoded)
    return encoded


def build_path(template: str, **segments: str | int) -> str:
    """
    Substitute {name} placeholders with encoded values.

    Values already passed through encode_meeting_uuid must be given as
    RawSegment so they are not encoded again.
    """
    values = {
        name: value if isinstance(value, RawSegment) else encode_path_segment(value)
        for name, value in segments.items()
    }
    return template.format(**values)


class RawSegment(str):
    """Path segment that is already percent-encoded."""
