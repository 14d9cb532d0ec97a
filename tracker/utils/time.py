from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_epoch_millis(dt: datetime) -> int:
    return int(dt.astimezone(UTC).timestamp() * 1000)
