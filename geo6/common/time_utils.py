"""UTC-focused time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def epoch_seconds(value: datetime | float | int | None = None) -> int:
    if value is None:
        value = utc_now()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


def utc_timestamp_iso() -> str:
    return utc_now().isoformat(timespec="milliseconds")
