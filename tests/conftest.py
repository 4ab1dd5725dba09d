"""Shared test fixtures and helpers for nezumi-p tests."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch, MagicMock

import httpx
import pytest
from rich.console import Console

from nezumi_p.config import Config, Station
from nezumi_p.models import Departure, DepartureStatus, ServiceAlert, StationTimetable, TimetableStore


# =============================================================================
# Constants
# =============================================================================


# A fixed "now" for deterministic time-based tests
FIXED_NOW = datetime(2025, 3, 15, 14, 30, 0, tzinfo=timezone.utc)

FIXTURES = Path(__file__).parent / "fixtures"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def freeze_time():
    """Patch dashboard._now to return FIXED_NOW for deterministic tests."""
    with patch("nezumi_p.dashboard._now", return_value=FIXED_NOW):
        yield


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "nezumi-p" / "config.yaml"


# =============================================================================
# Test data helpers
# =============================================================================


def make_station(line_ref="C01378", stop_point_ref="A463226", name="Michel Bizot (8) (Balard)"):
    return Station(line_ref=line_ref, stop_point_ref=stop_point_ref, name=name)


def make_config(stations=None, api_key="test-key"):
    if stations is None:
        stations = [make_station()]
    return Config(api_key=api_key, stations=tuple(stations))


def make_departure(
    minutes=30,
    seconds=0,
    direction="Balard",
    status=DepartureStatus.ON_TIME,
    feature=False,
    now=FIXED_NOW,
):
    """Build a departure due ``minutes`` (and ``seconds``) after ``now``."""
    return Departure(
        direction_label=direction,
        expected_departure_time=now + timedelta(minutes=minutes, seconds=seconds),
        status=status,
        has_feature_flag=feature,
    )


def make_timetable(departures=(), alerts=()):
    return StationTimetable(departures=tuple(departures), alerts=tuple(alerts))


def make_alert(channel="Perturbation", text="Trafic perturbé"):
    return ServiceAlert(channel_label=channel, message_text=text)


def make_store(*timetables):
    return TimetableStore(timetables, len(timetables))


def siri_visit(
    direction="Balard",
    expected="2025-03-15T15:00:00.000Z",
    status="onTime",
    features=None,
):
    """Build one MonitoredStopVisit in the feed's nested shape."""
    journey = {
        "DirectionName": [{"value": direction}],
        "MonitoredCall": {
            "ExpectedDepartureTime": expected,
            "DepartureStatus": status,
        },
    }
    if features is not None:
        journey["VehicleFeatureRef"] = features
    return {"MonitoredVehicleJourney": journey}


def siri_stop_monitoring(visits):
    return {
        "Siri": {
            "ServiceDelivery": {
                "StopMonitoringDelivery": [{"MonitoredStopVisit": list(visits)}],
            }
        }
    }


def siri_info_message(channel="Perturbation", text="Trafic perturbé"):
    return {
        "InfoChannelRef": {"value": channel},
        "Content": {"Message": [{"MessageText": {"value": text}}]},
    }


def siri_general_message(messages):
    return {
        "Siri": {
            "ServiceDelivery": {
                "GeneralMessageDelivery": [{"InfoMessage": list(messages)}],
            }
        }
    }


def render_to_text(renderable, width=120, height=None) -> str:
    """Capture a Rich renderable as plain text for assertion."""
    console = Console(record=True, width=width, height=height or 40, force_terminal=False)
    console.print(renderable)
    return console.export_text()


def load_fixture(name: str):
    """Load a JSON fixture file from tests/fixtures/."""
    with open(FIXTURES / name, encoding="utf-8") as f:
        return json.load(f)


def load_fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def make_response(body: str, status_code: int = 200):
    """Create a mock httpx response with the given text body."""
    response = MagicMock()
    response.text = body
    response.status_code = status_code
    if status_code >= 400:
        request = httpx.Request("GET", "https://example.invalid")
        real = httpx.Response(status_code, request=request)
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}", request=request, response=real
        )
    else:
        response.raise_for_status.return_value = None
    return response


def make_mock_httpx_client(*bodies):
    """Create a mock httpx.Client whose .get() returns the given bodies in order."""
    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    mock_client.get.side_effect = [
        body if isinstance(body, MagicMock) else make_response(body)
        for body in bodies
    ]
    return mock_client
