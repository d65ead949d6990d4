import io
from datetime import datetime
from typing import Dict, Optional

from rich.console import Console

from time_records import TimeRecords
from timer_view import build_view, render_table, watch
from timestamps import LongTimestamp


def long_at(hour, minute=0):
    return LongTimestamp(instant=datetime(2024, 5, 15, hour, minute))


class MemoryStore:
    def __init__(self, blocks: Dict[str, str]):
        self.blocks = dict(blocks)

    def get_block(self, block_id: str) -> Optional[str]:
        return self.blocks.get(block_id)

    def update_block(self, block_id: str, content: str) -> None:
        self.blocks[block_id] = content

    def exists(self, block_id: str) -> bool:
        return block_id in self.blocks


def test_build_view_for_open_record():
    records = TimeRecords(goal_minutes=240).add_interval(long_at(9), long_at(12)).set_pending(long_at(13))
    view = build_view(records, "day.md:1", now=datetime(2024, 5, 15, 13, 30))

    assert [(row.start, row.end, row.elapsed) for row in view.rows] == [
        ("2024-05-15T09:00", "2024-05-15T12:00", "3h"),
        ("2024-05-15T13:00", None, "30m"),
    ]
    assert view.total == "3h 30m"
    assert view.goal_remaining == "30m"
    assert view.goal_eta == "14:00"
    assert view.action == "clockOut"
    assert view.button_label == "Clock out"


def test_build_view_without_goal():
    view = build_view(TimeRecords().add_interval(long_at(9), long_at(9, 45)))
    assert view.goal_remaining is None
    assert view.goal_eta is None
    assert view.action == "clockIn"
    assert view.button_label == "Clock in"


def test_render_table():
    records = TimeRecords(goal_minutes=60).add_interval(long_at(9), long_at(9, 45)).set_pending(long_at(10))
    view = build_view(records, now=datetime(2024, 5, 15, 10, 5))
    output = Console(file=io.StringIO(), width=120)
    output.print(render_table(view))
    text = output.file.getvalue()

    assert "Punch Clock" in text
    assert "09:45" in text
    assert "now" in text
    assert "Total:" in text
    assert "50m" in text
    assert "Remaining:" in text
    assert "Clock out" in text


def test_watch_stops_when_block_disappears():
    store = MemoryStore({"day.md": "{{renderer :time-recorder, 2024-05-15T09:00 -}}"})
    sleeps = []

    def sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 2:
            del store.blocks["day.md"]

    ticks = watch(store, "day.md", 10, output=Console(file=io.StringIO()), sleep=sleep)
    assert ticks == 2
    assert sleeps == [10, 10]


def test_watch_renders_closed_record_once():
    store = MemoryStore({"day.md": "{{renderer :time-recorder, 09:00 - 10:00}}"})
    sleeps = []

    ticks = watch(store, "day.md", 10, output=Console(file=io.StringIO()), sleep=sleeps.append)
    assert ticks == 1
    assert sleeps == []


def test_watch_stops_once_clocked_out():
    store = MemoryStore({"day.md": "{{renderer :time-recorder, 2024-05-15T09:00 -}}"})

    def sleep(seconds):
        store.blocks["day.md"] = "{{renderer :time-recorder, 2024-05-15T09:00 - 2024-05-15T10:00}}"

    assert watch(store, "day.md", 5, output=Console(file=io.StringIO()), sleep=sleep) == 2


def test_watch_max_ticks():
    store = MemoryStore({"day.md": "{{renderer :time-recorder, 2024-05-15T09:00 -}}"})
    sleeps = []

    assert watch(store, "day.md", 1, output=Console(file=io.StringIO()), sleep=sleeps.append, max_ticks=3) == 3
    assert len(sleeps) == 2


def test_goal_eta_out_of_range_is_left_out():
    records = TimeRecords(goal_minutes=10_000_000_000).add_interval(long_at(9), long_at(10))
    view = build_view(records, now=datetime(2024, 5, 15, 11, 0))
    assert view.goal_remaining == "166666665h 40m"
    assert view.goal_eta is None

    output = Console(file=io.StringIO(), width=120)
    output.print(render_table(view))
    text = output.file.getvalue()
    assert "Remaining:" in text
    assert "ETA:" not in text
