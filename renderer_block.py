"""
Locating and rewriting the time recorder directive inside a block of text

    Worked on the parser today {{renderer :time-recorder, goal:480, 09:00 - 12:00, 13:00 -}}
"""

import re
from datetime import datetime
from typing import List, Optional, Union

from directive_grammar import split_directive_args
from record_errors import MultipleDirectivesFound, NoDirectiveFound
from settings import TIME_RECORDER_PLACEHOLDER, TODAY_PLACEHOLDER
from time_records import TimeRecords, parse_time_records
from timestamps import TimestampStyle, make_timestamp

RENDERER_ID = ":time-recorder"
RENDERER_PATTERN = re.compile(r"\{\{renderer\s+:time-recorder\s*(?:,\s*([^}]*))?\}\}")


def _single_match(text: str) -> "re.Match[str]":
    matches = list(RENDERER_PATTERN.finditer(text))
    if not matches:
        raise NoDirectiveFound(text)
    if len(matches) > 1:
        raise MultipleDirectivesFound(text, len(matches))
    return matches[0]


def locate_directive(text: str) -> List[str]:
    """Return the argument list of the one directive in the text."""
    return split_directive_args(_single_match(text).group(1) or "")


def render_directive(args: Union[TimeRecords, str]) -> str:
    args_text = str(args)
    if not args_text:
        return f"{{{{renderer {RENDERER_ID}}}}}"
    return f"{{{{renderer {RENDERER_ID}, {args_text}}}}}"


def rewrite(text: str, args: Union[TimeRecords, str]) -> str:
    """Replace the arguments of the one directive in the text, keeping the rest."""
    match = _single_match(text)
    return text[: match.start()] + render_directive(args) + text[match.end() :]


def parse_time_records_from_text(text: str) -> TimeRecords:
    return parse_time_records(locate_directive(text))


def renderer_macro(style: TimestampStyle, now: Optional[datetime] = None) -> str:
    """A fresh directive that is already clocked in."""
    pending = make_timestamp(now or datetime.now(), style)
    return render_directive(TimeRecords(pending=pending)) + " "


def journal_page_ref(date_format: str, now: Optional[datetime] = None) -> str:
    return f"[[{(now or datetime.now()).strftime(date_format)}]]"


def apply_template(
    template: str,
    style: TimestampStyle,
    journal_date_format: str,
    now: Optional[datetime] = None,
) -> str:
    """Expand a block template into the text of a new time recorder block."""
    now = now or datetime.now()
    if TIME_RECORDER_PLACEHOLDER not in template:
        template += f" {TIME_RECORDER_PLACEHOLDER}"
    if TODAY_PLACEHOLDER in template:
        template = template.replace(TODAY_PLACEHOLDER, journal_page_ref(journal_date_format, now))
    return template.replace(TIME_RECORDER_PLACEHOLDER, renderer_macro(style, now))
