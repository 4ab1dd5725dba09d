#!/usr/bin/env python3
"""
nezumi-p — Île-de-France Mobilités departure board TUI

Fetches live departures and service alerts for the configured stops once at
startup, then shows a departure board whose countdowns tick with the local
clock. Uses the PRIM marketplace API (https://prim.iledefrance-mobilites.fr).

Usage:
    nezumi-p                          # Board for the stations in the config file
    nezumi-p --config ./board.yaml    # Use another config file
    nezumi-p --once                   # Print one frame and exit
    nezumi-p -vv                      # Debug logging

Keys:
    Up/Down     select station
    Left/Right  switch column
    q           quit
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.logging import RichHandler

from .api import fetch_timetables
from .config import POLL_TIMEOUT, Config, default_config_path, init_config
from .countdown import Countdown, compute_countdown
from .display import (
    build_departure_card, build_error_panel, build_stations_panel,
    build_status_panel, build_timetable_panel, build_title_bar,
)
from .errors import ConfigError, FeedError
from .keyboard import Key, KeyReader
from .layout import (
    RowLayout, layout_board, layout_screen, scroll_offset, station_list_rows,
)
from .models import Departure, StationTimetable, TimetableStore, _now
from .navigation import NavEvent, Navigator

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    """Mutable UI state owned by the render loop."""
    navigator: Navigator
    column_focus: bool = False
    exit_requested: bool = False
    station_offset: int = 0

    @classmethod
    def for_stations(cls, station_count: int) -> "ViewState":
        return cls(navigator=Navigator(station_count))


@dataclass(frozen=True)
class FrameRow:
    row: RowLayout
    departure: Departure
    countdown: Countdown


@dataclass(frozen=True)
class Frame:
    """Everything computed for one render of the board."""
    timetable: StationTimetable | None
    rows: tuple[FrameRow, ...] = field(default_factory=tuple)
    station_rows: int = 0


def handle_key(state: ViewState, key: Key | None) -> None:
    """Apply a key press to the view state. None (poll timeout) changes nothing."""
    if key is Key.QUIT:
        state.exit_requested = True
    elif key in (Key.LEFT, Key.RIGHT):
        state.column_focus = not state.column_focus
    elif key is Key.UP:
        state.navigator.handle(NavEvent.MOVE_UP)
    elif key is Key.DOWN:
        state.navigator.handle(NavEvent.MOVE_DOWN)


def compute_frame(
    store: TimetableStore,
    state: ViewState,
    now: datetime,
    width: int,
    height: int,
) -> Frame:
    """
    Look up the selected station and compute layout and countdowns for its rows.

    Also scrolls the station list so the cursor stays visible.
    """
    screen = layout_screen(width, height)
    station_rows = station_list_rows(screen.stations)
    state.station_offset = scroll_offset(
        state.station_offset, state.navigator.cursor, station_rows
    )
    if len(store) == 0:
        return Frame(timetable=None, station_rows=station_rows)

    timetable = store[state.navigator.cursor]
    board = layout_board(len(timetable.departures), height, screen.timetable)

    rows = tuple(
        FrameRow(
            row=row,
            departure=timetable.departures[row.index],
            countdown=compute_countdown(timetable.departures[row.index], now),
        )
        for row in board.rows
    )
    return Frame(timetable=timetable, rows=rows, station_rows=station_rows)


def build_display(
    config: Config,
    store: TimetableStore,
    state: ViewState,
    width: int,
    height: int,
    now: datetime | None = None,
) -> Layout:
    """Build the full board for one frame."""
    now = now or _now()
    screen = layout_screen(width, height)
    frame = compute_frame(store, state, now, width, height)

    cards = [
        build_departure_card(r.departure, r.countdown, r.row)
        for r in frame.rows
        if r.row.card.height > 2 and r.row.card.width > 3
    ]

    layout = Layout()
    layout.split_column(
        Layout(build_title_bar(), name="title", size=screen.title.height),
        Layout(name="main"),
        Layout(build_status_panel(frame.timetable), name="status", size=screen.status.height),
    )
    layout["main"].split_row(
        Layout(
            build_stations_panel(
                config.stations,
                state.navigator.cursor,
                offset=state.station_offset,
                visible=frame.station_rows,
            ),
            name="stations",
            size=screen.stations.width,
        ),
        Layout(build_timetable_panel(cards), name="timetable"),
    )
    return layout


def run(console: Console, config: Config, store: TimetableStore, reader: KeyReader) -> None:
    """Redraw every poll timeout or key press until the user quits."""
    state = ViewState.for_stations(len(config.stations))

    def render() -> Layout:
        return build_display(config, store, state, console.size.width, console.size.height)

    with Live(render(), console=console, auto_refresh=False, screen=True) as live:
        while not state.exit_requested:
            key = reader.poll(POLL_TIMEOUT)
            handle_key(state, key)
            if not state.exit_requested:
                live.update(render(), refresh=True)


def setup_logging(verbosity: int, console: Console) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="nezumi-p",
        description="Live departure board for Île-de-France Mobilités stops",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keys:
    Up/Down     select station
    Left/Right  switch column
    q           quit

The config file (default ~/.config/nezumi-p/config.yaml) holds your PRIM API
key and the list of stations. It is created with example stations on first run.
        """
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Config file to load and re-save (default: XDG config dir)"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print a single frame and exit (no live screen)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log fetches (-v) or parsing details (-vv)"
    )

    args = parser.parse_args(argv)

    console = Console()
    setup_logging(args.verbose, console)

    config_path = args.config or default_config_path()
    try:
        config = init_config(config_path)
    except ConfigError as e:
        logger.debug("Config load failed", exc_info=True)
        console.print(build_error_panel(
            str(e), "Config", f"Check the config file at {config_path}"
        ))
        return 1

    if not args.once:
        console.print("[dim]Fetching departures...[/]")
    try:
        store = fetch_timetables(config)
    except FeedError as e:
        logger.debug("Feed fetch failed", exc_info=True)
        console.print(build_error_panel(
            str(e), "Feed", "Check the api_key in the config file and the network"
        ))
        return 1

    if args.once:
        state = ViewState.for_stations(len(config.stations))
        console.print(
            build_display(config, store, state, console.size.width, console.size.height),
            height=console.size.height,
        )
        return 0

    try:
        with KeyReader() as reader:
            run(console, config, store, reader)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
