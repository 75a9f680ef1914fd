"""Reconstruct absolute UTC instants from truncated DDHHMM header fields."""

from __future__ import annotations

from datetime import datetime, timezone

from ..errors import MalformedTimestamp

TIME_FIELD_LENGTH = 6


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def reconstruct(time_field: str, reference: datetime) -> datetime:
    """Return the UTC instant named by ``time_field`` relative to ``reference``.

    The field carries only day-of-month, hour and minute, so month and year are
    taken from the reference instant. A bulletin stamped on the 1st while the
    reference is later in the month is read as belonging to the next month.

    Raises:
        MalformedTimestamp: the field is not six digits or names an illegal
            calendar time (hour 25, day 31 in April, ...).
    """

    field = (time_field or "").strip()
    if len(field) != TIME_FIELD_LENGTH or not field.isdigit():
        raise MalformedTimestamp(time_field, "expected six digits DDHHMM")

    day = int(field[0:2])
    hour = int(field[2:4])
    minute = int(field[4:6])

    ref = _as_utc(reference)
    year, month = ref.year, ref.month
    if day == 1 and day < ref.day:
        month += 1
        if month > 12:
            month = 1
            year += 1

    try:
        return datetime(year, month, day, hour, minute, 0, tzinfo=timezone.utc)
    except ValueError as exc:
        raise MalformedTimestamp(time_field, str(exc)) from exc


def resolve_time(time_field: str, now: datetime) -> datetime | None:
    """Reconstruct against ``now``; malformed or future results resolve to ``None``."""

    try:
        stamp = reconstruct(time_field, now)
    except MalformedTimestamp:
        return None
    if stamp > _as_utc(now):
        return None
    return stamp


def age_hours(time_field: str, now: datetime) -> float | None:
    stamp = resolve_time(time_field, now)
    if stamp is None:
        return None
    return (_as_utc(now) - stamp).total_seconds() / 3600


__all__ = ["TIME_FIELD_LENGTH", "age_hours", "reconstruct", "resolve_time"]
