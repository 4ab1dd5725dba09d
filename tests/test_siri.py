"""Tests for SIRI-lite response parsing, using fixture and synthetic responses."""

from datetime import datetime, timedelta, timezone

import pytest

from nezumi_p.errors import FeedSchemaError
from nezumi_p.models import DepartureStatus, ServiceAlert
from nezumi_p.siri import decode_body, parse_general_message, parse_stop_monitoring

from conftest import (
    load_fixture, load_fixture_text,
    siri_general_message, siri_info_message, siri_stop_monitoring, siri_visit,
)


# =============================================================================
# TestStopMonitoringFixture
# =============================================================================


class TestStopMonitoringFixture:
    @pytest.fixture
    def departures(self):
        return parse_stop_monitoring(load_fixture("stop_monitoring.json"))

    def test_reads_first_delivery_only(self, departures):
        assert len(departures) == 3

    def test_direction_labels(self, departures):
        assert [d.direction_label for d in departures] == ["Balard", "Balard", "Pointe du Lac"]

    def test_statuses(self, departures):
        assert departures[0].status is DepartureStatus.ON_TIME
        assert departures[1].status is DepartureStatus.DELAYED
        assert departures[2].status == "cancelled"

    def test_times_are_timezone_aware(self, departures):
        assert departures[0].expected_departure_time == datetime(2025, 3, 15, 14, 34, tzinfo=timezone.utc)
        assert departures[2].expected_departure_time.utcoffset() == timedelta(hours=1)
        assert departures[2].expected_departure_time == datetime(2025, 3, 15, 15, 10, tzinfo=timezone.utc)

    def test_feature_flag(self, departures):
        assert [d.has_feature_flag for d in departures] == [True, False, False]

    def test_each_row_keeps_its_own_fields(self, departures):
        # Rows must not borrow the first visit's direction or status
        assert departures[2].direction_label != departures[0].direction_label
        assert departures[2].status != departures[0].status


# =============================================================================
# TestStopMonitoringErrors
# =============================================================================


class TestStopMonitoringErrors:
    def test_empty_delivery_is_named_precondition(self):
        with pytest.raises(FeedSchemaError, match="no StopMonitoringDelivery"):
            parse_stop_monitoring(load_fixture("stop_monitoring_no_delivery.json"))

    def test_no_visits_is_fine(self):
        assert parse_stop_monitoring(siri_stop_monitoring([])) == ()

    def test_missing_siri_root(self):
        with pytest.raises(FeedSchemaError, match="'Siri'"):
            parse_stop_monitoring({"ServiceDelivery": {}})

    def test_missing_monitored_call(self):
        visit = siri_visit()
        del visit["MonitoredVehicleJourney"]["MonitoredCall"]
        with pytest.raises(FeedSchemaError, match="MonitoredCall"):
            parse_stop_monitoring(siri_stop_monitoring([visit]))

    def test_missing_departure_status(self):
        visit = siri_visit()
        del visit["MonitoredVehicleJourney"]["MonitoredCall"]["DepartureStatus"]
        with pytest.raises(FeedSchemaError, match="DepartureStatus"):
            parse_stop_monitoring(siri_stop_monitoring([visit]))

    def test_empty_direction_name(self):
        visit = siri_visit()
        visit["MonitoredVehicleJourney"]["DirectionName"] = []
        with pytest.raises(FeedSchemaError, match="DirectionName"):
            parse_stop_monitoring(siri_stop_monitoring([visit]))

    @pytest.mark.parametrize("bad_time", ["soon", "2025-03-15T15:00:00", 1742050800, None])
    def test_bad_timestamp(self, bad_time):
        visit = siri_visit(expected=bad_time)
        with pytest.raises(FeedSchemaError, match="ExpectedDepartureTime"):
            parse_stop_monitoring(siri_stop_monitoring([visit]))

    def test_error_names_the_visit(self):
        visits = [siri_visit(), siri_visit(status=None)]
        with pytest.raises(FeedSchemaError, match=r"MonitoredStopVisit\[1\]"):
            parse_stop_monitoring(siri_stop_monitoring(visits))

    def test_delivery_must_be_list(self):
        data = {"Siri": {"ServiceDelivery": {"StopMonitoringDelivery": {}}}}
        with pytest.raises(FeedSchemaError, match="must be a list"):
            parse_stop_monitoring(data)


# =============================================================================
# TestGeneralMessage
# =============================================================================


class TestGeneralMessage:
    def test_fixture_alerts(self):
        alerts = parse_general_message(load_fixture("general_message.json"))
        assert alerts == (
            ServiceAlert("Perturbation", "Trafic perturbé entre Reuilly-Diderot et Balard."),
            ServiceAlert("Information", "Travaux le week-end prochain."),
        )

    def test_empty_info_message(self):
        assert parse_general_message(load_fixture("general_message_empty.json")) == ()

    def test_synthetic_message(self):
        data = siri_general_message([siri_info_message("Commercial", "Bonjour")])
        assert parse_general_message(data) == (ServiceAlert("Commercial", "Bonjour"),)

    def test_empty_delivery_is_named_precondition(self):
        data = {"Siri": {"ServiceDelivery": {"GeneralMessageDelivery": []}}}
        with pytest.raises(FeedSchemaError, match="no GeneralMessageDelivery"):
            parse_general_message(data)

    def test_message_without_text(self):
        message = siri_info_message()
        message["Content"]["Message"] = []
        with pytest.raises(FeedSchemaError, match="Message"):
            parse_general_message(siri_general_message([message]))

    def test_missing_channel(self):
        message = siri_info_message()
        del message["InfoChannelRef"]
        with pytest.raises(FeedSchemaError, match="InfoChannelRef"):
            parse_general_message(siri_general_message([message]))


# =============================================================================
# TestDecodeBody
# =============================================================================


class TestDecodeBody:
    def test_valid(self):
        data = decode_body(load_fixture_text("stop_monitoring.json"), "Stop monitoring")
        assert "Siri" in data

    def test_not_json(self):
        with pytest.raises(FeedSchemaError, match="not valid JSON"):
            decode_body("<html>Unauthorized</html>", "Stop monitoring")

    def test_not_an_object(self):
        with pytest.raises(FeedSchemaError, match="JSON object"):
            decode_body("[1, 2]", "Stop monitoring")
