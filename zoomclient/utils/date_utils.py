"""Date utilities"""

from datetime import UTC, datetime, timedelta

from dateutil.relativedelta import relativedelta

ZOOM_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def to_zoom_utc_format(value: datetime) -> str:
    """
    Format datetime the way Zoom expects it in query parameters.

    Naive datetimes are treated as local time and converted to UTC.

    Example:
        >>> to_zoom_utc_format(datetime(2024, 12, 1, 10, 0, tzinfo=UTC))
        '2024-12-01T10:00:00Z'
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC).strftime(ZOOM_UTC_FORMAT)


def default_range(
    days: int | None = None,
    months: int | None = None,
    now: datetime | None = None,
) -> tuple[str, str]:
    """
    (from, to) window ending now, formatted for Zoom.

    Used by the recordings listings: last 3 months for a user, last 7 days
    for an account.
    """
    now = now or datetime.now(UTC)
    if months is not None:
        start = now - relativedelta(months=months)
    else:
        start = now - timedelta(days=days or 0)
    return to_zoom_utc_format(start), to_zoom_utc_format(now)


def parse_date(date_str: str) -> str:
    """
    Parse date in different formats and return in format YYYY-MM-DD.

    Поддерживаемые форматы:
    - YYYY-MM-DD (стандартный)
    - DD-MM-YYYY (европейский)
    - DD/MM/YYYY (с слэшами)
    - DD-MM-YY (короткий год)
    - DD/MM/YY (короткий год)
    """
    if not date_str:
        return date_str

    date_str = date_str.strip()

    formats = [
        "%Y-%m-%d",  # YYYY-MM-DD
        "%d-%m-%Y",  # DD-MM-YYYY
        "%d/%m/%Y",  # DD/MM/YYYY
        "%d-%m-%y",  # DD-MM-YY
        "%d/%m/%y",  # DD/MM/YY
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue

    raise ValueError(f"Неподдерживаемый формат даты: {date_str}")


def parse_range_bound(date_str: str, end_of_day: bool = False) -> datetime:
    """
    Parse a CLI date into a UTC datetime for Zoom 'from' / 'to' filters.

    Example:
        >>> parse_range_bound("31/12/2024", end_of_day=True)
        datetime.datetime(2024, 12, 31, 23, 59, 59, tzinfo=datetime.timezone.utc)
    """
    dt = datetime.strptime(parse_date(date_str), "%Y-%m-%d").replace(tzinfo=UTC)
    if end_of_day:
        return dt.replace(hour=23, minute=59, second=59)
    return dt
