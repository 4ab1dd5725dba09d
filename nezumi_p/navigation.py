"""Station selection cursor."""

from enum import Enum


class NavEvent(Enum):
    MOVE_UP = "up"
    MOVE_DOWN = "down"


class Navigator:
    """
    Tracks the selected station index.

    Moves are clamped to ``[0, station_count - 1]``; the cursor never wraps.
    With no stations both moves are no-ops and the cursor stays at 0.
    """

    def __init__(self, station_count: int):
        if station_count < 0:
            raise ValueError("station_count must be non-negative")
        self.station_count = station_count
        self.cursor = 0

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        if self.cursor < self.station_count - 1:
            self.cursor += 1

    def handle(self, event: NavEvent) -> int:
        """Apply an event and return the resulting cursor."""
        if event is NavEvent.MOVE_UP:
            self.move_up()
        elif event is NavEvent.MOVE_DOWN:
            self.move_down()
        return self.cursor
