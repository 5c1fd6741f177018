from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value):
    """SQLite hands back naive datetimes; everything stored here is UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            value = datetime.fromisoformat(value_text)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
