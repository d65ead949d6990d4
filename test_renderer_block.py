from datetime import datetime

import pytest

from record_errors import MultipleDirectivesFound, NoDirectiveFound
from renderer_block import (
    apply_template,
    journal_page_ref,
    locate_directive,
    parse_time_records_from_text,
    render_directive,
    renderer_macro,
    rewrite,
)
from time_records import TimeRecords
from timestamps import LongTimestamp

BLOCK = "Parser work {{renderer :time-recorder, goal:480, 09:00 - 12:00, 13:00 -}} #project"


def test_locate_directive_in_surrounding_text():
    assert locate_directive(BLOCK) == ["goal:480", "09:00 - 12:00", "13:00 -"]


def test_locate_directive_without_arguments():
    assert locate_directive("{{renderer :time-recorder}}") == []
    assert locate_directive("{{renderer   :time-recorder , 09:00}}") == ["09:00"]


def test_no_directive():
    with pytest.raises(NoDirectiveFound):
        locate_directive("just a note {{renderer :something-else, 09:00}}")


def test_multiple_directives():
    with pytest.raises(MultipleDirectivesFound) as excinfo:
        locate_directive(BLOCK + "\n{{renderer :time-recorder, 14:00 -}}")
    assert excinfo.value.count == 2


def test_rewrite_keeps_surrounding_text():
    end = LongTimestamp(instant=datetime.now().replace(hour=23, minute=59, second=0, microsecond=0))
    records = parse_time_records_from_text(BLOCK).clock_out(end)
    new_block = rewrite(BLOCK, records)
    assert new_block.startswith("Parser work {{renderer :time-recorder, goal:480, 09:00 - 12:00, 13:00 - 2")
    assert new_block.endswith("}} #project")
    assert parse_time_records_from_text(new_block) == records


def test_rewrite_with_argument_text():
    assert rewrite("a {{renderer :time-recorder}} b", "10:00 -") == "a {{renderer :time-recorder, 10:00 -}} b"


def test_rewrite_requires_exactly_one_directive():
    with pytest.raises(NoDirectiveFound):
        rewrite("nothing here", "10:00 -")


def test_render_directive():
    assert render_directive(TimeRecords()) == "{{renderer :time-recorder}}"
    assert render_directive(TimeRecords(goal_minutes=30)) == "{{renderer :time-recorder, goal:30}}"


def test_renderer_macro_is_clocked_in():
    now = datetime(2024, 5, 15, 9, 5, 59)
    assert renderer_macro("short", now) == "{{renderer :time-recorder, 09:05 -}} "
    assert renderer_macro("long", now) == "{{renderer :time-recorder, 2024-05-15T09:05 -}} "


def test_journal_page_ref():
    assert journal_page_ref("%b %d, %Y", datetime(2024, 5, 15)) == "[[May 15, 2024]]"


def test_apply_default_template():
    now = datetime(2024, 5, 15, 9, 5)
    assert apply_template("{{{time-recorder}}}", "short", "%Y-%m-%d", now) == "{{renderer :time-recorder, 09:05 -}} "


def test_apply_template_appends_missing_recorder():
    now = datetime(2024, 5, 15, 9, 5)
    assert apply_template("Work", "short", "%Y-%m-%d", now) == "Work {{renderer :time-recorder, 09:05 -}} "


def test_apply_template_links_today():
    now = datetime(2024, 5, 15, 9, 5)
    text = apply_template("{{{today}}} {{{time-recorder}}}", "long", "%Y-%m-%d", now)
    assert text == "[[2024-05-15]] {{renderer :time-recorder, 2024-05-15T09:05 -}} "
