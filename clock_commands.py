"""
Clock-in / clock-out commands on a stored block

Every command reads the block, applies one transition and writes the block
back. When anything is wrong with the record or the requested transition, a
short message is printed and the block is left as it was.
"""

from datetime import datetime
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from block_store import BlockStore
from record_errors import AlreadyClockedIn, NotClockedIn, TimeRecordError
from renderer_block import apply_template, parse_time_records_from_text, rewrite
from settings import Settings, get_settings
from time_records import TimeRecords
from timestamps import format_time_of_day, make_timestamp

console = Console()


class BlockNotFound(LookupError):
    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"Block not found: {block_id}")


def _now_timestamp(now: Optional[datetime]):
    return make_timestamp(now or datetime.now(), get_settings().default_timestamp_style)


def _apply(
    store: BlockStore,
    block_id: str,
    transition: Callable[[TimeRecords], TimeRecords],
) -> Optional[TimeRecords]:
    content = store.get_block(block_id)
    if content is None:
        raise BlockNotFound(block_id)
    try:
        records = transition(parse_time_records_from_text(content))
        new_content = rewrite(content, records)
    except (AlreadyClockedIn, NotClockedIn) as err:
        console.print(f"[yellow]{escape(str(err))}[/yellow]")
        return None
    except TimeRecordError as err:
        console.print(f"[red]Error: {escape(str(err))}[/red]")
        return None
    store.update_block(block_id, new_content)
    return records


def clock_in_block(store: BlockStore, block_id: str, now: Optional[datetime] = None) -> Optional[TimeRecords]:
    records = _apply(store, block_id, lambda old: old.clock_in(_now_timestamp(now)))
    if records is not None:
        console.print(f"Clocking IN at {format_time_of_day(records.pending)}.")
    return records


def clock_out_block(store: BlockStore, block_id: str, now: Optional[datetime] = None) -> Optional[TimeRecords]:
    records = _apply(store, block_id, lambda old: old.clock_out(_now_timestamp(now)))
    if records is not None:
        console.print(f"Clocking OUT at {format_time_of_day(records.last_clocked_out)}.")
    return records


def toggle_block(store: BlockStore, block_id: str, now: Optional[datetime] = None) -> Optional[TimeRecords]:
    """The action behind the timer button: clock out when clocked in, otherwise in."""
    content = store.get_block(block_id)
    if content is None:
        raise BlockNotFound(block_id)
    try:
        is_open = parse_time_records_from_text(content).is_open
    except TimeRecordError as err:
        console.print(f"[red]Error: {escape(str(err))}[/red]")
        return None
    if is_open:
        return clock_out_block(store, block_id, now)
    return clock_in_block(store, block_id, now)


def new_block_text(settings: Optional[Settings] = None, now: Optional[datetime] = None) -> str:
    """Text of a new, already clocked-in time recorder block."""
    settings = settings or get_settings()
    return apply_template(
        settings.block_template,
        settings.default_timestamp_style,
        settings.journal_date_format,
        now,
    )
