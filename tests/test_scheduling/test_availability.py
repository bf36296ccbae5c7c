import pytest

from flight_management.models import ResourceKind
from flight_management.scheduling import AvailabilityChecker

from conftest import InMemoryReservations, window


class TestAvailabilityChecker:

    @pytest.fixture
    def checker(self, reservations):
        reservations.book(ResourceKind.AIRCRAFT, 1, 10, 12, flight_id=7)
        reservations.book(ResourceKind.CREW, 1, 10, 12, flight_id=7)
        return AvailabilityChecker(reservations)

    def test_overlapping_window_is_unavailable(self, checker):
        assert not checker.is_aircraft_available(1, window(11, 13))
        assert not checker.is_aircraft_available(1, window(9, 11))
        assert not checker.is_aircraft_available(1, window(9, 13))
        assert not checker.is_aircraft_available(1, window(10, 12))

    def test_touching_windows_are_available(self, checker):
        assert checker.is_aircraft_available(1, window(12, 14))
        assert checker.is_aircraft_available(1, window(8, 10))

    def test_other_resource_is_available(self, checker):
        assert checker.is_aircraft_available(2, window(10, 12))
        assert checker.is_crew_member_available(2, window(10, 12))

    def test_kinds_are_separate(self, reservations):
        reservations.book(ResourceKind.CREW, 5, 10, 12, flight_id=1)
        checker = AvailabilityChecker(reservations)
        assert checker.is_aircraft_available(5, window(10, 12))
        assert not checker.is_crew_member_available(5, window(10, 12))

    def test_exclusion_ignores_own_flight(self, checker):
        assert checker.is_aircraft_available(1, window(10, 12), exclude_flight_id=7)
        assert checker.is_crew_member_available(1, window(11, 13), exclude_flight_id=7)
        assert not checker.is_aircraft_available(1, window(10, 12), exclude_flight_id=8)

    def test_exclusion_only_removes_that_flight(self, reservations):
        reservations.book(ResourceKind.AIRCRAFT, 1, 10, 12, flight_id=7)
        reservations.book(ResourceKind.AIRCRAFT, 1, 11, 13, flight_id=8)
        checker = AvailabilityChecker(reservations)
        assert not checker.is_available(ResourceKind.AIRCRAFT, 1, window(10, 12), exclude_flight_id=7)

    def test_kind_can_be_given_as_string(self, checker):
        assert not checker.is_available("aircraft", 1, window(11, 13))
        assert checker.is_available("crew", 1, window(12, 13))

    def test_symmetry_of_overlap(self):
        """A conflicts with B exactly when B would conflict with A."""
        pairs = [((10, 12), (11, 13)), ((10, 12), (12, 14)), ((9, 15), (10, 11)), ((8, 9), (10, 11))]
        for first, second in pairs:
            forward = AvailabilityChecker(InMemoryReservations())
            forward.reservations.book(ResourceKind.AIRCRAFT, 1, *first)
            backward = AvailabilityChecker(InMemoryReservations())
            backward.reservations.book(ResourceKind.AIRCRAFT, 1, *second)
            assert (forward.is_aircraft_available(1, window(*second))
                    == backward.is_aircraft_available(1, window(*first)))
