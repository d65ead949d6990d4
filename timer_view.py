"""
Presentation of a time record: the render payload, a rich table and the
periodic refresh of a running timer
"""

import logging
import time
from datetime import datetime
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.live import Live
from rich.table import Table

from block_store import BlockStore
from record_errors import EtaOutOfRange
from renderer_block import parse_time_records_from_text
from time_records import TimeRecords
from timestamps import format_time_between, format_timestamp

logger = logging.getLogger(__name__)

console = Console()


class TimerRow(BaseModel):
    start: str
    end: Optional[str] = None  # None while the interval is still running
    elapsed: str


class TimerView(BaseModel):
    """Everything needed to draw one time recorder, already formatted"""

    block_id: Optional[str] = None
    rows: List[TimerRow]
    total: str
    goal_remaining: Optional[str] = None
    goal_eta: Optional[str] = None
    action: Literal["clockIn", "clockOut"]

    @property
    def button_label(self) -> str:
        return "Clock out" if self.action == "clockOut" else "Clock in"


def build_view(records: TimeRecords, block_id: Optional[str] = None, now: Optional[datetime] = None) -> TimerView:
    now = now or datetime.now()
    rows = [
        TimerRow(
            start=format_timestamp(interval.start),
            end=format_timestamp(interval.end),
            elapsed=format_time_between(interval.start, interval.end),
        )
        for interval in records.intervals
    ]
    if records.pending is not None:
        rows.append(
            TimerRow(
                start=format_timestamp(records.pending),
                elapsed=format_time_between(records.pending, now=now),
            )
        )

    goal_remaining = goal_eta = None
    if records.goal_minutes is not None:
        goal_remaining = records.goal_remaining_minutes(now)
        try:
            goal_eta = format_timestamp(records.goal_eta(now))
        except EtaOutOfRange as err:
            logger.warning("%s", err)

    return TimerView(
        block_id=block_id,
        rows=rows,
        total=records.total_time(now),
        goal_remaining=goal_remaining,
        goal_eta=goal_eta,
        action="clockOut" if records.is_open else "clockIn",
    )


def _timestamp_cell(text: str) -> str:
    # Long timestamps: dim the date so the time of day stands out
    if "T" in text:
        date_part, time_part = text.split("T", 1)
        return f"[dim]{date_part}[/dim]  {time_part}"
    return text


def render_table(view: TimerView) -> Table:
    table = Table(title="Punch Clock", show_header=True, header_style="bold magenta", caption=view.button_label)
    table.add_column("Start", style="green", justify="right")
    table.add_column("", justify="center")
    table.add_column("End", style="green")
    table.add_column("Duration", style="yellow")

    for row in view.rows:
        end = _timestamp_cell(row.end) if row.end is not None else "[dim]now[/dim]"
        table.add_row(_timestamp_cell(row.start), "–", end, f"[dim]{row.elapsed}[/dim]")

    table.add_section()
    table.add_row("Total:", "", "", f"[bold]{view.total}[/bold]")
    if view.goal_remaining is not None:
        table.add_row("Remaining:", "", "", view.goal_remaining)
    if view.goal_eta is not None:
        table.add_row("ETA:", "", "", _timestamp_cell(view.goal_eta))
    return table


def watch(
    store: BlockStore,
    block_id: str,
    interval: float,
    output: Optional[Console] = None,
    sleep: Callable[[float], None] = time.sleep,
    max_ticks: Optional[int] = None,
) -> int:
    """Keep the timer table of a block up to date while it is clocked in.

    Stops when the block disappears, when it is no longer clocked in, or after
    max_ticks renders. Returns the number of renders.
    """
    ticks = 0
    with Live(console=output or console, auto_refresh=False) as live:
        while True:
            if not store.exists(block_id):
                logger.info("Block %s no longer exists, not updating timer", block_id)
                break
            records = parse_time_records_from_text(store.get_block(block_id))
            live.update(render_table(build_view(records, block_id)), refresh=True)
            ticks += 1
            if not records.is_open or (max_ticks is not None and ticks >= max_ticks):
                break
            sleep(interval)
    return ticks
