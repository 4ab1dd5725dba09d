"""Feed requests against the Île-de-France Mobilités PRIM marketplace API."""

import logging

import httpx

from .config import API_BASE, API_KEY_HEADER, Config, Station
from .errors import FeedError
from .models import StationTimetable, TimetableStore
from .siri import decode_body, parse_general_message, parse_stop_monitoring

logger = logging.getLogger(__name__)


def stop_monitoring_url(station: Station) -> str:
    # stop_point_ref keeps its leading "A", completing the "%3A" escape after "Q"
    return (
        f"{API_BASE}/stop-monitoring"
        f"?MonitoringRef=STIF%3AStopPoint%3AQ%3{station.stop_point_ref}%3A"
        f"&LineRef=STIF%3ALine%3A%3A{station.line_ref}%3A"
    )


def general_message_url(station: Station) -> str:
    return f"{API_BASE}/general-message?LineRef=STIF%3ALine%3A%3A{station.line_ref}%3A"


def fetch_body(client: httpx.Client, url: str, api_key: str) -> str:
    """GET a feed URL and return the raw response text."""
    logger.info("GET %s", url)
    try:
        response = client.get(url, headers={API_KEY_HEADER: api_key})
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FeedError(f"HTTP {e.response.status_code} from {url}") from e
    except httpx.HTTPError as e:
        raise FeedError(f"Request to {url} failed: {e}") from e
    return response.text


def fetch_station_timetable(client: httpx.Client, station: Station, api_key: str) -> StationTimetable:
    """Fetch and flatten departures and alerts for one station."""
    body = fetch_body(client, stop_monitoring_url(station), api_key)
    departures = parse_stop_monitoring(decode_body(body, f"Stop monitoring for {station.name}"))

    body = fetch_body(client, general_message_url(station), api_key)
    alerts = parse_general_message(decode_body(body, f"General message for {station.name}"))

    return StationTimetable(departures=departures, alerts=alerts)


def fetch_timetables(config: Config) -> TimetableStore:
    """
    Fetch every configured station in order.

    No timeout and no retries: the first failure raises and aborts startup.
    """
    timetables = []
    with httpx.Client(timeout=None) as client:
        for station in config.stations:
            timetables.append(fetch_station_timetable(client, station, config.api_key))
    logger.info("Fetched timetables for %d stations", len(timetables))
    return TimetableStore(timetables, len(config.stations))
