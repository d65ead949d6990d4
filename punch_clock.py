#!/usr/bin/env python3
"""
Punch Clock CLI

Tracks working time inside plain text notes. A note holds a time recorder
directive such as

    {{renderer :time-recorder, goal:480, 09:00 - 12:00, 13:00 -}}

and the commands below clock in and out of it, show the running total and keep
a live timer on screen. Blocks are addressed as FILE (whole file) or FILE:LINE.
"""

import logging
from pathlib import Path
from typing import Optional

import click
import pyperclip
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from block_store import FileBlockStore
from clock_commands import BlockNotFound, clock_in_block, clock_out_block, new_block_text, toggle_block
from record_errors import TimeRecordError
from renderer_block import parse_time_records_from_text
from settings import get_settings, load_settings, on_settings_changed
from timer_view import build_view, render_table, watch

console = Console()


def _load_block(store: FileBlockStore, block_id: str) -> str:
    content = store.get_block(block_id)
    if content is None:
        raise click.ClickException(f"Block not found: {block_id}")
    return content


def _run(command, store: FileBlockStore, block_id: str) -> None:
    try:
        records = command(store, block_id)
    except BlockNotFound as err:
        raise click.ClickException(str(err))
    if records is None:
        raise click.ClickException(f"{block_id} was left unchanged.")
    console.print(render_table(build_view(records, block_id)))


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory that block ids are relative to.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, root: Path, verbose: bool) -> None:
    """Track working time inside plain text notes."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    try:
        on_settings_changed(load_settings())
    except ValidationError as err:
        raise click.ClickException(f"Invalid PUNCH_CLOCK_* settings:\n{err}")
    ctx.obj = FileBlockStore(root)


@main.command()
@click.argument("target", required=False)
@click.option("--copy", is_flag=True, help="Copy the new block to the clipboard.")
@click.pass_obj
def insert(store: FileBlockStore, target: Optional[str], copy: bool) -> None:
    """Create a new time recorder block, clocked in now.

    The block is appended to TARGET when given, otherwise only printed.
    """
    text = new_block_text()
    if target:
        block_id = store.append_block(target, text)
        console.print(f"[green]Added time recorder as {block_id}[/green]")
    console.print(text, markup=False, highlight=False)
    if copy:
        try:
            pyperclip.copy(text)
            console.print("[green]Copied the new block to the clipboard.[/green]")
        except pyperclip.PyperclipException as err:
            console.print(f"[yellow]Unable to copy to the clipboard: {err}[/yellow]")


@main.command()
@click.argument("block_id")
@click.pass_obj
def show(store: FileBlockStore, block_id: str) -> None:
    """Show the intervals and totals of a block."""
    try:
        records = parse_time_records_from_text(_load_block(store, block_id))
    except TimeRecordError as err:
        raise click.ClickException(str(err))
    console.print(render_table(build_view(records, block_id)))


@main.command("in")
@click.argument("block_id")
@click.pass_obj
def clock_in(store: FileBlockStore, block_id: str) -> None:
    """Clock in: start a new open interval."""
    _run(clock_in_block, store, block_id)


@main.command("out")
@click.argument("block_id")
@click.pass_obj
def clock_out(store: FileBlockStore, block_id: str) -> None:
    """Clock out: close the open interval."""
    _run(clock_out_block, store, block_id)


@main.command()
@click.argument("block_id")
@click.pass_obj
def toggle(store: FileBlockStore, block_id: str) -> None:
    """Clock out when clocked in, otherwise clock in."""
    _run(toggle_block, store, block_id)


@main.command("watch")
@click.argument("block_id")
@click.option("--interval", type=float, default=None, help="Seconds between refreshes.")
@click.pass_obj
def watch_command(store: FileBlockStore, block_id: str, interval: Optional[float]) -> None:
    """Keep a live timer on screen while the block is clocked in."""
    _load_block(store, block_id)
    try:
        watch(store, block_id, interval or get_settings().refresh_seconds, output=console)
    except TimeRecordError as err:
        raise click.ClickException(str(err))
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


if __name__ == "__main__":
    main()
