import datetime as _dt
import uuid

from sqlalchemy.types import TypeDecorator, DateTime


def utc_now() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


def new_id() -> str:
    """Opaque identifier for relationship rows."""
    return str(uuid.uuid4())


def _as_utc(value):
    if isinstance(value, str):
        # Accept ISO strings too, SQLite may hand them back
        value = _dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=_dt.timezone.utc)
    return value.astimezone(_dt.timezone.utc)


class UtcAwareDateTime(TypeDecorator):
    """Always write UTC and always return tz-aware datetimes (UTC)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return _as_utc(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return _as_utc(value)
