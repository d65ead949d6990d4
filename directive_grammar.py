"""
Tokenizer for the argument list of a time recorder directive

    goal:480, 09:00 - 12:00, 2024-05-15T13:00 - 2024-05-15T14:30, 15:00 -
"""

import logging
import re
from typing import List, Optional, Tuple

from record_errors import MalformedIntervalToken

logger = logging.getLogger(__name__)

GOAL_PREFIX = "goal:"

# Both timestamp styles end in (H)H:MM, so a range dash is only recognised right
# after that. The dashes inside a long date (2024-05-15) never follow a minute.
RANGE_SEPARATOR = re.compile(r"(?<=\d:\d{2})\s*-")


def split_directive_args(raw: str) -> List[str]:
    """Split the raw argument text on commas and trim every argument."""
    if not raw.strip():
        return []
    return [arg.strip() for arg in raw.split(",")]


def classify_args(args: List[str]) -> Tuple[Optional[str], List[str]]:
    """Separate the goal argument from the interval tokens.

    Returns (goal, interval_tokens) where goal is the text after the ``goal:``
    prefix of the first goal argument, or None. Interval tokens keep their order.
    """
    goal: Optional[str] = None
    interval_tokens: List[str] = []
    for arg in args:
        if arg.startswith(GOAL_PREFIX):
            if goal is None:
                goal = arg[len(GOAL_PREFIX):].strip()
            else:
                logger.warning("Ignoring repeated goal argument %r", arg)
            continue
        interval_tokens.append(arg)
    return goal, interval_tokens


def split_interval_token(token: str) -> List[str]:
    """Split "start - end" into its timestamps, or "start -" / "start" into one.

    Raises MalformedIntervalToken if the token holds more than one range dash.
    """
    parts = [part.strip() for part in RANGE_SEPARATOR.split(token)]
    if len(parts) > 2:
        raise MalformedIntervalToken(token)
    if len(parts) == 2 and not parts[1]:
        # "HH:MM -" is an open interval
        parts.pop()
    return parts
