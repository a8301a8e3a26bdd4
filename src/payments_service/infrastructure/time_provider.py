"""Clocks behind the TimeProvider port.

Repositories stamp created_at, updated_at and deleted_at from whichever
clock they are given; every value is an aware datetime in UTC.
"""

from datetime import UTC, datetime, timedelta

from payments_service.application.ports import TimeProvider


class SystemTimeProvider(TimeProvider):
    """Wall clock, used by build_application() unless a clock is injected."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Clock that stands still until moved.

    Lets tests assert exact row timestamps and control the newest-first
    listing order by advancing between saves.
    """

    def __init__(self, start: datetime) -> None:
        self._now = _require_utc(start)

    def now(self) -> datetime:
        return self._now

    def set_time(self, new_time: datetime) -> None:
        self._now = _require_utc(new_time)

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock by delta and return the new reading."""
        self._now += delta
        return self._now


def _require_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not UTC:
        raise ValueError(f"Clock readings must be UTC-aware, got tzinfo={moment.tzinfo}")
    return moment
