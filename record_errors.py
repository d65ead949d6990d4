"""
Errors raised while reading or changing time records
"""


class TimeRecordError(Exception):
    """Base class for every user-input or state error in a time record.

    Must not subclass ValueError: pydantic validators re-raise anything else unchanged.
    """


class MalformedTimestamp(TimeRecordError):
    def __init__(self, text: str, reason: str = "Invalid timestamp format"):
        self.text = text
        super().__init__(f"{reason}: {text!r}")


class MalformedIntervalToken(TimeRecordError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid time slot: {token!r}")


class MalformedGoal(TimeRecordError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid goal, expected a whole number of minutes: {text!r}")


class PendingNotLast(TimeRecordError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid time record: second part missing from {token!r}")


class IntervalInversion(TimeRecordError):
    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"End time is before start time: {end} is before {start}")


class AlreadyClockedIn(TimeRecordError):
    def __init__(self):
        super().__init__("Already clocked in!")


class NotClockedIn(TimeRecordError):
    def __init__(self):
        super().__init__("Not clocked in!")


class NoDirectiveFound(TimeRecordError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"No time recorder found in: {text!r}")


class MultipleDirectivesFound(TimeRecordError):
    def __init__(self, text: str, count: int):
        self.text = text
        self.count = count
        super().__init__(f"There must be exactly one time recorder, found {count} in: {text!r}")


class EtaOutOfRange(TimeRecordError):
    def __init__(self, goal_minutes: int):
        self.goal_minutes = goal_minutes
        super().__init__(f"Goal of {goal_minutes} minutes has no ETA within the supported dates")
