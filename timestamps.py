"""
Timestamps as they are written inside a time recorder directive

Two textual styles are supported:
  short  "HH:MM"            a time of day, interpreted as today
  long   "YYYY-MM-DDTHH:MM" a full local date and time (no timezone)
"""

import math
import re
from datetime import datetime, timedelta
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from record_errors import MalformedGoal, MalformedTimestamp

# e.g. 2024-05-15T21:12
LONG_FORMAT = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}", re.ASCII)
# e.g. 9:05 or 21:12
SHORT_FORMAT = re.compile(r"\d{1,2}:\d{2}", re.ASCII)
DURATION_FORMAT = re.compile(r"\d+", re.ASCII)

MINUTES_PER_HOUR = 60

TimestampStyle = Literal["short", "long"]


class ShortTimestamp(BaseModel):
    """A point in time written as the time of day only."""

    model_config = ConfigDict(frozen=True)

    instant: datetime
    style: Literal["short"] = "short"


class LongTimestamp(BaseModel):
    """A point in time written as a full local date and time."""

    model_config = ConfigDict(frozen=True)

    instant: datetime
    style: Literal["long"] = "long"


Timestamp = Annotated[Union[ShortTimestamp, LongTimestamp], Field(discriminator="style")]


def make_timestamp(instant: datetime, style: TimestampStyle) -> Timestamp:
    if style == "short":
        return ShortTimestamp(instant=instant)
    return LongTimestamp(instant=instant)


def timestamp_now(style: TimestampStyle) -> Timestamp:
    """Capture the current local time, tagged with the given style."""
    return make_timestamp(datetime.now(), style)


def parse_timestamp(text: str) -> Timestamp:
    """Parse either timestamp style. Raises MalformedTimestamp for anything else."""
    if LONG_FORMAT.fullmatch(text):
        return LongTimestamp(instant=_parse_local_iso(text))
    if SHORT_FORMAT.fullmatch(text):
        return ShortTimestamp(instant=_parse_time_of_day(text))
    raise MalformedTimestamp(text)


def _parse_local_iso(text: str) -> datetime:
    try:
        return datetime.strptime(text, "%Y-%m-%dT%H:%M")
    except ValueError:
        raise MalformedTimestamp(text, "Invalid date") from None


def _parse_time_of_day(text: str) -> datetime:
    hours_text, minutes_text = text.split(":")
    hours, minutes = int(hours_text), int(minutes_text)
    if not 0 <= hours < 24 or not 0 <= minutes < MINUTES_PER_HOUR:
        raise MalformedTimestamp(text, "Hours or minutes out of range")
    today = datetime.now()
    return today.replace(hour=hours, minute=minutes, second=0, microsecond=0)


def format_time_of_day(timestamp: Timestamp) -> str:
    return timestamp.instant.strftime("%H:%M")


def format_timestamp(timestamp: Timestamp) -> str:
    """Inverse of parse_timestamp. Seconds are always dropped."""
    if isinstance(timestamp, ShortTimestamp):
        return format_time_of_day(timestamp)
    return timestamp.instant.strftime("%Y-%m-%dT%H:%M")


def minutes_between(start: datetime, end: datetime) -> float:
    """Unrounded minutes from start to end; rounding happens only for display."""
    return (end - start).total_seconds() / MINUTES_PER_HOUR


def increment_by_minutes(instant: datetime, minutes: float) -> datetime:
    return instant + timedelta(minutes=minutes)


def round_minutes(minutes: float) -> int:
    """Round to the nearest minute, ties toward positive infinity."""
    return math.floor(minutes + 0.5)


def parse_duration_minutes(text: str) -> int:
    """Parse the minutes of a ``goal:`` argument (prefix already stripped)."""
    text = text.strip()
    if not DURATION_FORMAT.fullmatch(text):
        raise MalformedGoal(text)
    return int(text)


def format_duration_minutes(minutes: int) -> str:
    """Format whole minutes as "45m", "60m", "2h" or "1h 1m".

    Negative durations (an exceeded goal) carry a leading minus on the
    formatted magnitude: -90 -> "-1h 30m", -45 -> "-45m".
    """
    if minutes < 0:
        return "-" + format_duration_minutes(-minutes)
    if minutes > MINUTES_PER_HOUR:
        hours, rest = divmod(minutes, MINUTES_PER_HOUR)
        if rest == 0:
            return f"{hours}h"
        return f"{hours}h {rest}m"
    return f"{minutes}m"


def format_time_between(
    start: Timestamp,
    end: Optional[Timestamp] = None,
    now: Optional[datetime] = None,
) -> str:
    """Elapsed time of a single interval. An open interval is measured up to now."""
    end_instant = end.instant if end is not None else (now or datetime.now())
    return format_duration_minutes(round_minutes(minutes_between(start.instant, end_instant)))
