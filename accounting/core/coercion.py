import math
from datetime import date, datetime, time, timezone
from decimal import Decimal


def as_number(value) -> float:
    """Coerce a loosely typed column value to float, falling back to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    if isinstance(value, str):
        value_text = value.strip()
        # float() accepts digit separators; database drivers never emit them.
        if not value_text or "_" in value_text:
            return 0.0
        try:
            number = float(value_text)
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp() * 1000
    return 0.0


def as_boolean(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        return value != "0" and value.lower() != "false"
    return bool(value)


def format_number(value: float) -> str:
    """Render integral floats without a trailing ".0"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = ["as_boolean", "as_number", "format_number"]
