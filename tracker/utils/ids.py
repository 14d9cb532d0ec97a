from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from utils.constants import ID_STRATEGIES
from utils.time import to_epoch_millis, utc_now

IdFactory = Callable[[], str]


class ClockIdGenerator:
    """Wall-clock millisecond ids that never repeat within one process.

    Two calls in the same millisecond (or a clock that steps backwards) bump
    the value past the last one handed out.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        value = to_epoch_millis(self._clock())
        if value <= self._last:
            value = self._last + 1
        self._last = value
        return str(value)


def uuid_id() -> str:
    return str(uuid4())


def build_id_factory(strategy: str) -> IdFactory:
    if strategy == "clock":
        return ClockIdGenerator()
    if strategy == "uuid":
        return uuid_id
    raise ValueError(f"Unknown id strategy {strategy!r}. Use: {', '.join(ID_STRATEGIES)}")
