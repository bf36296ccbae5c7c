from datetime import datetime, timedelta, timezone

from flight_management.models import (
    FlightProposal, ResourceKind, ResourceReservation, RuleResult, TimeWindow
)

from conftest import at, window


class TestTimeWindow:

    def test_overlap_is_symmetric(self):
        a = window(10, 12)
        b = window(11, 13)
        assert a.overlaps(b)
        assert b.overlaps(a)
        for first, second in [(window(10, 12), window(12, 14)), (window(9, 15), window(10, 11))]:
            assert first.overlaps(second) == second.overlaps(first)

    def test_touching_windows_do_not_overlap(self):
        assert not window(10, 12).overlaps(window(12, 14))
        assert not window(12, 14).overlaps(window(10, 12))

    def test_containment_overlaps(self):
        assert window(9, 15).overlaps(window(10, 11))
        assert window(10, 11).overlaps(window(9, 15))

    def test_naive_datetimes_are_utc(self):
        naive = TimeWindow(datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 1, 12, 0))
        assert naive.start == at(10)
        assert naive.start.tzinfo is not None

    def test_offsets_are_normalised(self):
        plus_three = timezone(timedelta(hours=3))
        local = TimeWindow(datetime(2025, 1, 1, 13, 0, tzinfo=plus_three),
                           datetime(2025, 1, 1, 15, 0, tzinfo=plus_three))
        assert local == window(10, 12)
        assert local.duration_minutes == 120


class TestResourceReservation:

    def test_conflict_respects_exclusion(self):
        reservation = ResourceReservation(ResourceKind.AIRCRAFT, 1, window(10, 12), flight_id=7)
        assert reservation.conflicts_with(window(11, 13))
        assert not reservation.conflicts_with(window(11, 13), exclude_flight_id=7)
        assert reservation.conflicts_with(window(11, 13), exclude_flight_id=8)


class TestFlightProposal:

    def test_window_and_crew_copy(self):
        crew = [1, 2]
        proposal = FlightProposal('TK1', at(10), at(12), 1, 1, 2, crew)
        crew.append(3)
        assert proposal.crew_member_ids == [1, 2]
        assert proposal.window == window(10, 12)
        assert proposal.to_dict()['crew_member_ids'] == [1, 2]


class TestRuleResult:

    def test_unpacking(self):
        ok, reason = RuleResult.fail("nope")
        assert ok is False
        assert reason == "nope"

    def test_truthiness(self):
        assert RuleResult.ok()
        assert not RuleResult.fail("nope")
        assert str(RuleResult.fail("nope")) == "Invalid: nope"
