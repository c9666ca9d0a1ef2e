"""Tests for deriving departures from stop monitoring visits."""

from datetime import UTC, datetime, timedelta, timezone
from typing import Any

import pytest

from transit_departures.adapters.transit_api.departure_parser import DepartureParser
from transit_departures.domain.models import Departure, StopMonitoringVisit

NOW = datetime(2030, 1, 1, 9, 0, tzinfo=UTC)


def _at(minutes: int) -> str:
    """Timestamp string the given number of minutes after NOW."""
    return (NOW + timedelta(minutes=minutes)).strftime("%Y-%m-%dT%H:%M:%SZ")


def _visit(minutes: int, line_ref: str | None = "N", **fields: Any) -> StopMonitoringVisit:
    return StopMonitoringVisit(line_ref=line_ref, expected_departure_time=_at(minutes), **fields)


class TestScenarios:
    """Tests for the documented single-visit scenarios."""

    def test_when_single_future_visit_then_one_departure_with_fallbacks(self) -> None:
        """Given one unmonitored visit, when parsing, then one departure uses the fallbacks."""
        visit = StopMonitoringVisit(
            line_ref="L1", expected_departure_time="2030-01-01T10:00:00.000Z"
        )

        departures = DepartureParser.parse_departures([visit], "", now=NOW)

        assert departures == [
            Departure(
                line_name="L1",
                destination="Unknown",
                departure_time=datetime(2030, 1, 1, 10, 0, tzinfo=UTC),
                is_realtime=False,
            )
        ]

    def test_when_visits_out_of_order_then_sorted_by_time(self) -> None:
        """Given visits at 10:05 and 10:01, when parsing, then 10:01 comes first."""
        visits = [
            StopMonitoringVisit(aimed_departure_time="2030-01-01T10:05:00Z"),
            StopMonitoringVisit(aimed_departure_time="2030-01-01T10:01:00Z"),
        ]

        departures = DepartureParser.parse_departures(visits, "", now=NOW)

        assert [d.departure_time.minute for d in departures] == [1, 5]

    def test_when_visit_in_past_then_excluded_without_error(self) -> None:
        """Given a visit in 2020, when parsing, then the result is empty."""
        visit = StopMonitoringVisit(expected_departure_time="2020-01-01T00:00:00Z")

        assert DepartureParser.parse_departures([visit], "", now=NOW) == []


class TestOrderingAndLimit:
    """Tests for sorting and truncation."""

    def test_when_more_than_five_visits_then_five_soonest_are_returned(self) -> None:
        """Given eight future visits, when parsing, then the five soonest remain in order."""
        visits = [_visit(minutes) for minutes in (30, 5, 25, 10, 40, 1, 15, 20)]

        departures = DepartureParser.parse_departures(visits, "", now=NOW)

        assert [d.departure_time for d in departures] == [
            NOW + timedelta(minutes=m) for m in (1, 5, 10, 15, 20)
        ]

    def test_when_limit_given_then_result_is_capped(self) -> None:
        """Given a custom limit, when parsing, then at most that many departures are returned."""
        visits = [_visit(minutes) for minutes in range(1, 10)]

        assert len(DepartureParser.parse_departures(visits, "", now=NOW, limit=3)) == 3

    def test_when_limit_exceeds_five_then_result_is_still_capped_at_five(self) -> None:
        """Given a limit above five, when parsing, then at most five departures are returned."""
        visits = [_visit(minutes) for minutes in range(1, 13)]

        assert len(DepartureParser.parse_departures(visits, "", now=NOW, limit=20)) == 5

    def test_when_times_are_equal_then_upstream_order_is_kept(self) -> None:
        """Given two visits at the same time, when parsing, then their order is preserved."""
        visits = [_visit(5, line_ref="first"), _visit(5, line_ref="second")]

        departures = DepartureParser.parse_departures(visits, "", now=NOW)

        assert [d.line_name for d in departures] == ["first", "second"]

    def test_when_no_visits_then_empty(self) -> None:
        """Given no visits, when parsing, then the result is empty."""
        assert DepartureParser.parse_departures([], "", now=NOW) == []


class TestFutureOnly:
    """Tests for excluding departures that are not in the future."""

    def test_when_visit_is_exactly_now_then_excluded(self) -> None:
        """Given a visit at exactly now, when parsing, then it is excluded."""
        assert DepartureParser.parse_departures([_visit(0)], "", now=NOW) == []

    def test_when_visit_is_one_second_ahead_then_included(self) -> None:
        """Given a visit one second after now, when parsing, then it is included."""
        visit = StopMonitoringVisit(expected_departure_time="2030-01-01T09:00:01Z")

        assert len(DepartureParser.parse_departures([visit], "", now=NOW)) == 1

    def test_when_mixed_past_and_future_then_only_future_remain(self) -> None:
        """Given past and future visits, when parsing, then every result is after now."""
        visits = [_visit(m) for m in (-10, -1, 0, 1, 10)]

        departures = DepartureParser.parse_departures(visits, "", now=NOW)

        assert len(departures) == 2
        assert all(d.departure_time > NOW for d in departures)

    def test_when_now_not_given_then_current_time_is_used(self) -> None:
        """Given no reference time, when parsing, then past visits are still excluded."""
        visits = [
            StopMonitoringVisit(expected_departure_time="2020-01-01T00:00:00Z"),
            StopMonitoringVisit(expected_departure_time="2999-01-01T00:00:00Z"),
        ]

        departures = DepartureParser.parse_departures(visits)

        assert [d.departure_time.year for d in departures] == [2999]

    def test_when_now_is_naive_then_raises_value_error(self) -> None:
        """Given a reference time without timezone, when parsing, then ValueError is raised."""
        with pytest.raises(ValueError, match="timezone-aware"):
            DepartureParser.parse_departures([_visit(5)], "", now=datetime(2030, 1, 1, 9, 0))

    def test_when_now_has_other_offset_then_compared_as_instant(self) -> None:
        """Given a reference time in another zone, when parsing, then instants are compared."""
        pacific_now = NOW.astimezone(timezone(timedelta(hours=-8)))
        visits = [_visit(-1), _visit(1)]

        departures = DepartureParser.parse_departures(visits, "", now=pacific_now)

        assert [d.departure_time for d in departures] == [NOW + timedelta(minutes=1)]


class TestTimePrecedence:
    """Tests for selecting the time field."""

    def test_when_expected_and_aimed_departure_then_expected_wins(self) -> None:
        """Given expected and aimed departure, when parsing, then the expected time is used."""
        visit = StopMonitoringVisit(expected_departure_time=_at(7), aimed_departure_time=_at(5))

        departures = DepartureParser.parse_departures([visit], "", now=NOW)

        assert departures[0].departure_time == NOW + timedelta(minutes=7)

    def test_when_only_arrival_times_then_expected_arrival_wins(self) -> None:
        """Given only arrival times, when parsing, then the expected arrival is used."""
        visit = StopMonitoringVisit(expected_arrival_time=_at(4), aimed_arrival_time=_at(3))

        departures = DepartureParser.parse_departures([visit], "", now=NOW)

        assert departures[0].departure_time == NOW + timedelta(minutes=4)

    def test_when_only_aimed_arrival_then_it_is_used(self) -> None:
        """Given only an aimed arrival, when parsing, then it is used."""
        visit = StopMonitoringVisit(aimed_arrival_time=_at(3))

        departures = DepartureParser.parse_departures([visit], "", now=NOW)

        assert departures[0].departure_time == NOW + timedelta(minutes=3)

    def test_when_expected_departure_is_empty_then_next_field_is_used(self) -> None:
        """Given an empty expected departure, when parsing, then the aimed departure is used."""
        visit = StopMonitoringVisit(expected_departure_time="", aimed_departure_time=_at(6))

        departures = DepartureParser.parse_departures([visit], "", now=NOW)

        assert departures[0].departure_time == NOW + timedelta(minutes=6)

    def test_when_selected_time_is_unparseable_then_visit_is_skipped(self) -> None:
        """Given a malformed expected departure, when parsing, then the visit is skipped."""
        visits = [
            StopMonitoringVisit(expected_departure_time="soon", aimed_departure_time=_at(6)),
            _visit(8),
        ]

        departures = DepartureParser.parse_departures(visits, "", now=NOW)

        assert [d.departure_time for d in departures] == [NOW + timedelta(minutes=8)]

    def test_when_visit_has_no_times_then_skipped(self) -> None:
        """Given a visit without any time, when parsing, then it is skipped."""
        visits = [
            StopMonitoringVisit(line_ref="N"),
            StopMonitoringVisit(expected_departure_time=""),
        ]

        assert DepartureParser.parse_departures(visits, "", now=NOW) == []


class TestLineFilter:
    """Tests for filtering by line reference."""

    def test_when_filter_given_then_only_matching_line_refs_remain(self) -> None:
        """Given a line filter, when parsing, then only visits of that line remain."""
        visits = [_visit(1, "N"), _visit(2, "J"), _visit(3, "N"), _visit(4, None)]

        departures = DepartureParser.parse_departures(visits, "N", now=NOW)

        assert [d.departure_time for d in departures] == [
            NOW + timedelta(minutes=1),
            NOW + timedelta(minutes=3),
        ]

    def test_when_filter_differs_in_case_then_no_match(self) -> None:
        """Given a filter in other case, when parsing, then nothing matches."""
        assert DepartureParser.parse_departures([_visit(1, "KT")], "kt", now=NOW) == []

    def test_when_filter_matches_published_name_only_then_no_match(self) -> None:
        """Given a filter equal to the published name only, when parsing, then nothing matches."""
        visit = _visit(1, "14R", published_line_name="MISSION RAPID")

        assert DepartureParser.parse_departures([visit], "MISSION RAPID", now=NOW) == []

    def test_when_filter_empty_then_all_lines_remain(self) -> None:
        """Given no filter, when parsing, then every line is kept."""
        visits = [_visit(1, "N"), _visit(2, "J")]

        assert len(DepartureParser.parse_departures(visits, "", now=NOW)) == 2


class TestDepartureFields:
    """Tests for line name, destination and real-time flag."""

    def test_when_published_name_present_then_it_is_the_line_name(self) -> None:
        """Given a published line name, when parsing, then it is preferred over the line ref."""
        visit = _visit(1, "N", published_line_name="JUDAH")

        assert DepartureParser.parse_departures([visit], now=NOW)[0].line_name == "JUDAH"

    def test_when_no_line_information_then_fallback_label_is_used(self) -> None:
        """Given neither published name nor line ref, when parsing, then "Train" is used."""
        visit = StopMonitoringVisit(expected_departure_time=_at(1))

        assert DepartureParser.parse_departures([visit], now=NOW)[0].line_name == "Train"

    def test_when_destination_present_then_it_is_used(self) -> None:
        """Given a destination, when parsing, then it is kept."""
        visit = _visit(1, destination_name="Ocean Beach")

        assert DepartureParser.parse_departures([visit], now=NOW)[0].destination == "Ocean Beach"

    def test_when_monitored_then_departure_is_realtime(self) -> None:
        """Given a monitored visit, when parsing, then the departure is real-time."""
        visit = _visit(1, monitored=True)

        assert DepartureParser.parse_departures([visit], now=NOW)[0].is_realtime is True

    def test_when_monitored_false_then_departure_is_not_realtime(self) -> None:
        """Given an explicitly unmonitored visit, when parsing, then it is not real-time."""
        visit = _visit(1, monitored=False)

        assert DepartureParser.parse_departures([visit], now=NOW)[0].is_realtime is False
