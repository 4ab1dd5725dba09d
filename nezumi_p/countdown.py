"""Per-frame countdown and proximity gauge for a single departure."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .models import Departure, DepartureStatus, format_duration

# One gauge percent per 36 seconds: 60 minutes out reads 100
SECONDS_PER_PERCENT = 36


@dataclass(frozen=True)
class Countdown:
    remaining: timedelta
    display_text: str
    proximity_ratio: int


def status_label(status: DepartureStatus | str) -> str:
    """Board label for a departure status. Unknown statuses are shown verbatim."""
    if status == DepartureStatus.ON_TIME:
        return "ON TIME"
    if status == DepartureStatus.DELAYED:
        return "DELAYED"
    return status


def proximity_ratio(remaining: timedelta) -> int:
    """
    Map time to departure onto a 0-100 gauge.

    Saturates at 100 an hour or more ahead and bottoms out at 0 once the
    departure is due or overdue.
    """
    seconds = int(remaining.total_seconds())
    return max(0, min(seconds // SECONDS_PER_PERCENT, 100))


def compute_countdown(departure: Departure, now: datetime) -> Countdown:
    """Compute the remaining time, its display text and the gauge value."""
    remaining = departure.expected_departure_time - now
    text = f"{format_duration(remaining)} {status_label(departure.status)}"
    return Countdown(
        remaining=remaining,
        display_text=text,
        proximity_ratio=proximity_ratio(remaining),
    )
