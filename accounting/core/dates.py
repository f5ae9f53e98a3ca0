from datetime import date, datetime, time, timezone

from accounting.core.errors import ValidationError


def _as_utc(value: datetime) -> datetime:
    # Naive values come back from the database and are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_date(value) -> str:
    """Return the YYYY-MM-DD portion of a string, date or datetime."""
    if not value:
        return ""
    if isinstance(value, str):
        return value[:10]
    if isinstance(value, datetime):
        return _as_utc(value).date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def format_timestamp(value):
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return _as_utc(value).isoformat()
    if isinstance(value, date):
        return start_of_day(value).isoformat()
    return str(value)


def parse_timestamp(value, field: str) -> datetime:
    """Parse an ISO-8601 date or timestamp into an aware UTC datetime."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return start_of_day(value)
    if isinstance(value, str):
        value_text = value.strip()
        if value_text.endswith("Z"):
            value_text = value_text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(value_text))
        except ValueError:
            pass
    raise ValidationError(f"{field} must be an ISO-8601 date or timestamp")


def normalize_timestamp(value, field: str) -> str:
    return parse_timestamp(value, field).isoformat()


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
