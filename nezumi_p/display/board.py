"""Departure cards and the timetable panel."""

from rich.align import Align
from rich.console import Group
from rich.padding import Padding
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table
from rich.text import Text

from ..countdown import Countdown
from ..layout import RowLayout, footer_glyphs, split_columns
from ..models import Departure, format_time

# Width of the gauge border with the full "Distance" title: ╭─ Distance ─╮
MIN_GAUGE_WIDTH = 14


def build_distance_gauge(ratio: int) -> Panel:
    """Bordered gauge filled to the proximity ratio."""
    progress = Progress(
        BarColumn(bar_width=None, complete_style="white", finished_style="white"),
        TextColumn("[italic]{task.percentage:>3.0f}%"),
        expand=True,
    )
    progress.add_task("distance", total=100, completed=ratio)
    return Panel(
        progress,
        title="[bold italic color(2)]Distance[/]",
        title_align="left",
        height=3,
    )


def build_departure_card(departure: Departure, countdown: Countdown, row: RowLayout) -> Panel:
    """
    One departure: clock time on the left, distance gauge in the middle,
    countdown on the right and the train footer underneath.

    The row regions decide which zones are drawn and cap the footer width;
    rich places the zones inside the card. Zones the layout squeezed to
    nothing are left out, and the gauge is dropped once its title no longer fits.
    """
    left, _, right = split_columns(row.card)

    grid = Table.grid(expand=True)
    cells = []
    if row.clock.width > 0:
        # Column widths exclude the card border, which the outer zones share
        grid.add_column(width=left.width - 1, no_wrap=True)
        cells.append(Padding(
            Text(format_time(departure.expected_departure_time), style="bold italic"),
            (1, 1, 0, 1),
        ))
    if row.gauge.width >= MIN_GAUGE_WIDTH:
        grid.add_column(ratio=1)
        cells.append(build_distance_gauge(countdown.proximity_ratio))
    if row.countdown.width > 0:
        grid.add_column(width=right.width - 1, no_wrap=True)
        cells.append(Padding(
            Text(countdown.display_text, style="bold italic", justify="right"),
            (1, 1, 0, 1),
        ))
    if cells:
        grid.add_row(*cells)

    footer = Text(footer_glyphs(departure.has_feature_flag), style="bold color(1)", no_wrap=True)
    footer.truncate(row.footer.width)

    return Panel(
        Group(grid, Align.center(footer)),
        title=Text(departure.direction_label, style="bold italic color(3)"),
        title_align="left",
        height=row.card.height,
    )


def build_timetable_panel(cards: list) -> Panel:
    """Stack departure cards inside the timetable box. No cards renders an empty box."""
    return Panel(
        Group(*cards),
        title="[bold italic color(2)]Timetable[/]",
        title_align="left",
    )
