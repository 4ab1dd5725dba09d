"""Station list display."""

from rich.padding import Padding
from rich.panel import Panel
from rich.text import Text

from ..config import Station

HIGHLIGHT_SYMBOL = ">> "


def build_stations_panel(
    stations: tuple[Station, ...],
    cursor: int,
    offset: int = 0,
    visible: int | None = None,
) -> Panel:
    """
    List the configured stations, marking the selected one.

    Only ``visible`` names starting at ``offset`` are drawn; None draws them all.
    """
    end = len(stations) if visible is None else offset + visible
    content = Text(no_wrap=True, overflow="ellipsis")
    for i in range(offset, min(end, len(stations))):
        if i > offset:
            content.append("\n")
        name = stations[i].name
        if i == cursor:
            content.append(HIGHLIGHT_SYMBOL + name, style="bold italic color(1)")
        else:
            content.append(" " * len(HIGHLIGHT_SYMBOL) + name, style="white")

    return Panel(
        Padding(content, (1, 1)),
        title="[bold italic color(2)]Stops[/]",
        title_align="left",
    )
