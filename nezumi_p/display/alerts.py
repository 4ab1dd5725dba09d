"""Service alert status strip."""

from rich.panel import Panel
from rich.text import Text

from ..models import StationTimetable


def build_status_panel(timetable: StationTimetable | None) -> Panel:
    """Show the first active service alert for a station, or an empty box."""
    alert = timetable.first_alert if timetable else None
    if alert is None:
        return Panel(
            "",
            title="[bold italic color(2)]Status[/]",
            title_align="left",
        )

    return Panel(
        Text(alert.message_text, justify="center", style="bold italic"),
        title=Text(f"Status: {alert.channel_label}"),
        title_align="left",
        style="bold italic color(1)",
    )
