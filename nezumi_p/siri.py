"""
SIRI-lite response parsing.

The feed nests every record several levels deep (Siri -> ServiceDelivery ->
StopMonitoringDelivery -> MonitoredStopVisit -> MonitoredVehicleJourney ->
MonitoredCall). Responses are flattened here into ``Departure`` and
``ServiceAlert`` records; nothing outside this module sees the nested shape.
"""

import json
import logging
from typing import Any

from .errors import FeedSchemaError
from .models import Departure, ServiceAlert, parse_status, parse_time

logger = logging.getLogger(__name__)


def _require(mapping: Any, key: str, context: str) -> Any:
    if not isinstance(mapping, dict):
        raise FeedSchemaError(f"Expected an object at {context}, got {type(mapping).__name__}")
    if key not in mapping:
        raise FeedSchemaError(f"Missing required key '{key}' in {context}")
    return mapping[key]


def _require_list(mapping: Any, key: str, context: str) -> list:
    value = _require(mapping, key, context)
    if not isinstance(value, list):
        raise FeedSchemaError(f"'{key}' in {context} must be a list")
    return value


def _first(items: list, context: str) -> Any:
    """Return the first element of a delivery array, which the feed always sends."""
    if not items:
        raise FeedSchemaError(f"Feed returned no {context}; expected at least one")
    return items[0]


def _value(mapping: Any, key: str, context: str) -> str:
    """Unwrap the feed's ``{"value": ...}`` text wrapper."""
    value = _require(_require(mapping, key, context), "value", f"{context}.{key}")
    if not isinstance(value, str):
        raise FeedSchemaError(f"{context}.{key}.value must be a string")
    return value


def decode_body(body: str, context: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise FeedSchemaError(f"{context} response was not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise FeedSchemaError(f"{context} response must be a JSON object")
    return data


def _service_delivery(data: dict[str, Any]) -> dict[str, Any]:
    siri = _require(data, "Siri", "response")
    return _require(siri, "ServiceDelivery", "Siri")


def parse_departure(journey: dict[str, Any], context: str) -> Departure:
    """Flatten one MonitoredVehicleJourney into a Departure."""
    directions = _require_list(journey, "DirectionName", context)
    direction = _first(directions, f"{context}.DirectionName")
    direction_label = _require(direction, "value", f"{context}.DirectionName[0]")
    if not isinstance(direction_label, str):
        raise FeedSchemaError(f"{context}.DirectionName[0].value must be a string")

    call = _require(journey, "MonitoredCall", context)
    call_context = f"{context}.MonitoredCall"
    raw_time = _require(call, "ExpectedDepartureTime", call_context)
    try:
        expected = parse_time(raw_time)
    except ValueError as exc:
        raise FeedSchemaError(f"Bad ExpectedDepartureTime in {call_context}: {exc}") from exc

    status = _require(call, "DepartureStatus", call_context)
    if not isinstance(status, str):
        raise FeedSchemaError(f"{call_context}.DepartureStatus must be a string")

    features = journey.get("VehicleFeatureRef") or []

    return Departure(
        direction_label=direction_label,
        expected_departure_time=expected,
        status=parse_status(status),
        has_feature_flag=bool(features),
    )


def parse_stop_monitoring(data: dict[str, Any]) -> tuple[Departure, ...]:
    """Parse a stop-monitoring response. Only the first delivery is read."""
    delivery = _first(
        _require_list(_service_delivery(data), "StopMonitoringDelivery", "ServiceDelivery"),
        "StopMonitoringDelivery",
    )
    visits = _require_list(delivery, "MonitoredStopVisit", "StopMonitoringDelivery[0]")

    departures = []
    for i, visit in enumerate(visits):
        context = f"MonitoredStopVisit[{i}]"
        journey = _require(visit, "MonitoredVehicleJourney", context)
        departures.append(parse_departure(journey, f"{context}.MonitoredVehicleJourney"))

    logger.debug("Parsed %d departures", len(departures))
    return tuple(departures)


def parse_info_message(message: dict[str, Any], context: str) -> ServiceAlert:
    channel = _value(message, "InfoChannelRef", context)
    content = _require(message, "Content", context)
    texts = _require_list(content, "Message", f"{context}.Content")
    first = _first(texts, f"{context}.Content.Message")
    text = _value(first, "MessageText", f"{context}.Content.Message[0]")
    return ServiceAlert(channel_label=channel, message_text=text)


def parse_general_message(data: dict[str, Any]) -> tuple[ServiceAlert, ...]:
    """Parse a general-message response. Only the first delivery is read."""
    delivery = _first(
        _require_list(_service_delivery(data), "GeneralMessageDelivery", "ServiceDelivery"),
        "GeneralMessageDelivery",
    )
    messages = _require_list(delivery, "InfoMessage", "GeneralMessageDelivery[0]")

    alerts = tuple(
        parse_info_message(message, f"InfoMessage[{i}]")
        for i, message in enumerate(messages)
    )
    logger.debug("Parsed %d service alerts", len(alerts))
    return alerts
