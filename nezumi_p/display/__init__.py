"""Display rendering components for nezumi-p."""

from .header import build_title_bar
from .stations import build_stations_panel
from .board import build_departure_card, build_timetable_panel
from .alerts import build_status_panel
from .errors import build_error_panel

__all__ = [
    "build_title_bar",
    "build_stations_panel",
    "build_departure_card",
    "build_timetable_panel",
    "build_status_panel",
    "build_error_panel",
]
