"""Flat timetable records and pure time-formatting helpers."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum


def _now() -> datetime:
    """Current UTC time, timezone-aware. Extracted for test patching."""
    return datetime.now(timezone.utc)


class DepartureStatus(str, Enum):
    """Departure statuses the board has a label for. Other feed values stay raw strings."""
    ON_TIME = "onTime"
    DELAYED = "delayed"


def parse_status(value: str) -> DepartureStatus | str:
    try:
        return DepartureStatus(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class Departure:
    """One upcoming service at a monitored stop."""
    direction_label: str
    expected_departure_time: datetime
    status: DepartureStatus | str
    has_feature_flag: bool = False


@dataclass(frozen=True)
class ServiceAlert:
    channel_label: str
    message_text: str


@dataclass(frozen=True)
class StationTimetable:
    """Departures and alerts fetched for one configured station."""
    departures: tuple[Departure, ...] = ()
    alerts: tuple[ServiceAlert, ...] = ()

    @property
    def first_alert(self) -> ServiceAlert | None:
        return self.alerts[0] if self.alerts else None


class TimetableStore:
    """Read-only timetables, index-aligned with the configured station list."""

    def __init__(self, timetables, station_count: int):
        timetables = tuple(timetables)
        if len(timetables) != station_count:
            raise ValueError(
                f"Got {len(timetables)} timetables for {station_count} stations"
            )
        self._timetables = timetables

    def __len__(self) -> int:
        return len(self._timetables)

    def __getitem__(self, index: int) -> StationTimetable:
        return self._timetables[index]

    def __iter__(self):
        return iter(self._timetables)


# Fractional seconds of any length; fromisoformat before 3.11 takes only 3 or 6 digits
_FRACTION = re.compile(r"(?<=:\d{2})\.(\d+)")


def _normalize_fraction(time_val: str) -> str:
    return _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), time_val, count=1)


def parse_time(time_val: str) -> datetime:
    """Parse an RFC 3339 timestamp from the feed. Raises ValueError if it is not one."""
    if not isinstance(time_val, str):
        raise ValueError(f"Expected a timestamp string, got {time_val!r}")
    dt = datetime.fromisoformat(_normalize_fraction(time_val.replace("Z", "+00:00")))
    if dt.tzinfo is None:
        raise ValueError(f"Timestamp has no UTC offset: {time_val!r}")
    return dt


def format_time(dt: datetime) -> str:
    """Wall-clock time of a departure in the local timezone."""
    return dt.astimezone().strftime("%H:%M:%S")


def format_duration(delta: timedelta) -> str:
    """
    Compact human rendering of a duration, truncated to whole seconds.

    Examples: "29m 59s", "1h 5m", "2d 3h", "0s", "-45s".
    """
    total = int(delta.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    if total == 0:
        return "0s"

    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s")):
        if value:
            parts.append(f"{value}{unit}")
    return sign + " ".join(parts)
