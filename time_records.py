"""
The time record of a single directive: completed intervals, an optional open
(pending) interval and an optional goal

Records are immutable. Clocking in or out returns a new TimeRecords and leaves
the previous one untouched, so a view rendered from an older value stays valid.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from directive_grammar import GOAL_PREFIX, classify_args, split_interval_token
from record_errors import AlreadyClockedIn, EtaOutOfRange, IntervalInversion, NotClockedIn, PendingNotLast
from settings import get_settings
from timestamps import (
    Timestamp,
    format_duration_minutes,
    format_timestamp,
    increment_by_minutes,
    make_timestamp,
    minutes_between,
    parse_duration_minutes,
    parse_timestamp,
    round_minutes,
    timestamp_now,
)


class Interval(BaseModel):
    """A completed stretch of tracked time."""

    model_config = ConfigDict(frozen=True)

    start: Timestamp
    end: Timestamp

    @model_validator(mode="after")
    def check_order(self) -> "Interval":
        if self.end.instant < self.start.instant:
            raise IntervalInversion(format_timestamp(self.start), format_timestamp(self.end))
        return self

    @property
    def minutes(self) -> float:
        return minutes_between(self.start.instant, self.end.instant)

    def __str__(self) -> str:
        return f"{format_timestamp(self.start)} - {format_timestamp(self.end)}"


class TimeRecords(BaseModel):
    model_config = ConfigDict(frozen=True)

    intervals: Tuple[Interval, ...] = ()
    pending: Optional[Timestamp] = None
    goal_minutes: Optional[int] = Field(default=None, ge=0)

    @property
    def is_open(self) -> bool:
        return self.pending is not None

    @property
    def last_clocked_out(self) -> Optional[Timestamp]:
        if not self.intervals:
            return None
        return self.intervals[-1].end

    # Transitions ---------------------------------------------------------------

    def add_interval(self, start: Timestamp, end: Timestamp) -> "TimeRecords":
        interval = Interval(start=start, end=end)
        return TimeRecords(
            intervals=self.intervals + (interval,),
            pending=self.pending,
            goal_minutes=self.goal_minutes,
        )

    def set_pending(self, pending: Timestamp) -> "TimeRecords":
        return TimeRecords(intervals=self.intervals, pending=pending, goal_minutes=self.goal_minutes)

    def reset_pending(self) -> "TimeRecords":
        return TimeRecords(intervals=self.intervals, pending=None, goal_minutes=self.goal_minutes)

    def clock_in(self, now: Optional[Timestamp] = None) -> "TimeRecords":
        if self.pending is not None:
            raise AlreadyClockedIn()
        return self.set_pending(now or timestamp_now(get_settings().default_timestamp_style))

    def clock_out(self, now: Optional[Timestamp] = None) -> "TimeRecords":
        """Close the pending interval. A clock that went backwards raises IntervalInversion."""
        if self.pending is None:
            raise NotClockedIn()
        start = self.pending
        end = now or timestamp_now(get_settings().default_timestamp_style)
        if start.instant.date() != end.instant.date():
            # An interval spanning midnight only reads back correctly with dates
            start, end = make_timestamp(start.instant, "long"), make_timestamp(end.instant, "long")
        return self.reset_pending().add_interval(start, end)

    # Derived values --------------------------------------------------------------
    # All of these read the clock while a record is open, pass `now` to pin it.

    def total_minutes_exact(self, now: Optional[datetime] = None) -> float:
        total = sum(interval.minutes for interval in self.intervals)
        if self.pending is not None:
            total += minutes_between(self.pending.instant, now or datetime.now())
        return total

    def total_minutes(self, now: Optional[datetime] = None) -> int:
        return round_minutes(self.total_minutes_exact(now))

    def total_time(self, now: Optional[datetime] = None) -> str:
        return format_duration_minutes(self.total_minutes(now))

    def goal_remaining_minutes(self, now: Optional[datetime] = None) -> str:
        """Remaining time towards the goal, negative once the goal is exceeded."""
        return format_duration_minutes((self.goal_minutes or 0) - self.total_minutes(now))

    def goal_eta(self, now: Optional[datetime] = None) -> Timestamp:
        """When the goal is reached if the clock keeps running.

        Written in the short style when that is still today, otherwise in the
        long style. A goal that is already met yields an ETA in the past.
        Raises EtaOutOfRange when the ETA falls outside the dates datetime
        can represent.
        """
        now = now or datetime.now()
        remaining = (self.goal_minutes or 0) - self.total_minutes_exact(now)
        try:
            eta = increment_by_minutes(now, remaining)
        except OverflowError:
            raise EtaOutOfRange(self.goal_minutes or 0) from None
        return make_timestamp(eta, "short" if eta.date() == now.date() else "long")

    # Serialization -----------------------------------------------------------------

    def to_canonical_text(self) -> str:
        parts: List[str] = []
        if self.goal_minutes is not None:
            parts.append(f"{GOAL_PREFIX}{self.goal_minutes}")
        parts.extend(str(interval) for interval in self.intervals)
        if self.pending is not None:
            parts.append(f"{format_timestamp(self.pending)} -")
        return ", ".join(parts)

    def __str__(self) -> str:
        return self.to_canonical_text()


def parse_time_records(args: List[str]) -> TimeRecords:
    """Build TimeRecords from directive arguments, failing on the first bad one."""
    goal_text, tokens = classify_args(args)
    goal_minutes = parse_duration_minutes(goal_text) if goal_text is not None else None

    intervals: List[Interval] = []
    pending: Optional[Timestamp] = None
    for index, token in enumerate(tokens):
        parts = split_interval_token(token)
        if len(parts) == 1:
            if index != len(tokens) - 1:
                raise PendingNotLast(token)
            pending = parse_timestamp(parts[0])
        else:
            intervals.append(Interval(start=parse_timestamp(parts[0]), end=parse_timestamp(parts[1])))

    return TimeRecords(intervals=tuple(intervals), pending=pending, goal_minutes=goal_minutes)
