"""
Utility functions and constants for document builders.
"""

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional

from backendlistener.models import AssertionResult

# Every CI build's elapsed time is laid onto this day so runs overlay exactly
BUILD_COMPARISON_DATE = date(2017, 1, 1)


def assertion_records(assertions: list[AssertionResult]) -> list[dict[str, Any]]:
    """Convert assertion outcomes to document maps, keeping source order."""
    return [
        {
            "failure": assertion.is_failed,
            "failureMessage": assertion.failure_message,
            "name": assertion.name,
        }
        for assertion in assertions
    ]


def split_elapsed(elapsed_millis: int) -> tuple[int, int]:
    """
    Split elapsed milliseconds into whole minutes and leftover seconds.

    Division truncates toward zero, so a negative duration gives negative
    parts (-1500 ms is 0 minutes, -1 second).
    """
    minutes, seconds = divmod(abs(elapsed_millis) // 1000, 60)
    if elapsed_millis < 0:
        return -minutes, -seconds
    return minutes, seconds


def elapsed_datetime(day: date, elapsed_millis: int, tz: Optional[tzinfo] = None) -> datetime:
    """
    Lay an elapsed duration onto a day, starting from midnight.

    Minutes past 59 carry into the hour (75 minutes is 01:15:00).

    Raises:
        OverflowError: If the result falls outside the supported date range
    """
    minutes, seconds = split_elapsed(elapsed_millis)
    midnight = datetime.combine(day, time(0), tzinfo=tz)
    return midnight + timedelta(minutes=minutes, seconds=seconds)
