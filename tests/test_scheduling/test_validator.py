import time

import pytest

from flight_management.models import FlightProposal, ResourceKind, ValidationDeadlineExceeded
from flight_management.scheduling import FlightValidator
from flight_management.scheduling.crew_rules import NO_PILOT_MESSAGE
from flight_management.scheduling.time_rules import DEPARTURE_IN_PAST_MESSAGE, SAME_AIRPORT_MESSAGE
from flight_management.scheduling.validator import AIRCRAFT_UNAVAILABLE_MESSAGE
from flight_management.storage import ReservationQueries

from conftest import NOW, InMemoryCrew, at

AIRCRAFT_X = 11


class BrokenReservations(ReservationQueries):

    def count_conflicting_reservations(self, *args, **kwargs):
        raise ConnectionError("database unavailable")


def proposal(start_hour, end_hour, crew=(1, 2), aircraft_id=AIRCRAFT_X, origin=1, destination=2,
             exclude_flight_id=None) -> FlightProposal:
    return FlightProposal(
        flight_number='TK1591',
        departure_time=at(start_hour),
        arrival_time=at(end_hour),
        aircraft_id=aircraft_id,
        departure_airport_id=origin,
        arrival_airport_id=destination,
        crew_member_ids=list(crew),
        exclude_flight_id=exclude_flight_id,
    )


class TestFlightValidator:

    @pytest.fixture
    def validator(self, reservations, crew_directory):
        return FlightValidator(reservations, crew_directory, clock=lambda: NOW)

    def test_valid_creation(self, validator):
        assert validator.validate_for_creation(proposal(10, 12)).is_valid

    def test_aircraft_booked_overlap_fails(self, validator, reservations):
        reservations.book(ResourceKind.AIRCRAFT, AIRCRAFT_X, 10, 12, flight_id=7)
        result = validator.validate_for_creation(proposal(11, 13))
        assert not result.is_valid
        assert result.reason == AIRCRAFT_UNAVAILABLE_MESSAGE

    def test_aircraft_touching_boundary_passes(self, validator, reservations):
        reservations.book(ResourceKind.AIRCRAFT, AIRCRAFT_X, 10, 12, flight_id=7)
        assert validator.validate_for_creation(proposal(12, 14)).is_valid

    def test_update_unchanged_flight_passes(self, validator, reservations):
        reservations.book(ResourceKind.AIRCRAFT, AIRCRAFT_X, 10, 12, flight_id=7)
        reservations.book(ResourceKind.CREW, 1, 10, 12, flight_id=7)
        reservations.book(ResourceKind.CREW, 2, 10, 12, flight_id=7)

        unchanged = proposal(10, 12, exclude_flight_id=7)
        assert validator.validate_for_update(7, unchanged).is_valid
        # The same proposal as a new flight conflicts with flight 7
        assert not validator.validate_for_creation(proposal(10, 12)).is_valid

    def test_update_still_conflicts_with_other_flights(self, validator, reservations):
        reservations.book(ResourceKind.AIRCRAFT, AIRCRAFT_X, 10, 12, flight_id=7)
        reservations.book(ResourceKind.AIRCRAFT, AIRCRAFT_X, 12, 14, flight_id=8)
        result = validator.validate_for_update(7, proposal(11, 13, exclude_flight_id=7))
        assert result.reason == AIRCRAFT_UNAVAILABLE_MESSAGE

    def test_update_applies_future_departure_rule(self, validator):
        result = validator.validate_for_update(7, proposal(4, 5, exclude_flight_id=7))
        assert result.reason == DEPARTURE_IN_PAST_MESSAGE

    def test_first_conflicting_crew_member_is_named(self, validator, reservations):
        reservations.book(ResourceKind.CREW, 2, 10, 12, flight_id=7)
        reservations.book(ResourceKind.CREW, 4, 10, 12, flight_id=8)

        result = validator.validate_for_creation(proposal(11, 13, crew=(1, 2, 4, 5)))
        assert result.reason == (
            "Crew member 'Mehmet Demir' is already assigned to another flight during this time period."
        )

        # List order decides which member is reported
        result = validator.validate_for_creation(proposal(11, 13, crew=(4, 5, 1, 2)))
        assert "'Can Yilmaz'" in result.reason

    def test_unresolvable_crew_member_reported_by_id(self, reservations, crew_members):
        directory = InMemoryCrew(crew_members)
        validator = FlightValidator(reservations, directory, clock=lambda: NOW)
        reservations.book(ResourceKind.CREW, 42, 10, 12, flight_id=7)

        result = validator.validate_for_creation(proposal(11, 13, crew=(1, 2, 42)))
        assert result.reason == (
            "Crew member 'ID:42' is already assigned to another flight during this time period."
        )

    def test_time_failure_skips_all_queries(self, validator, reservations):
        result = validator.validate_for_creation(proposal(10, 12, origin=1, destination=1))
        assert result.reason == SAME_AIRPORT_MESSAGE
        assert reservations.queries == []

    def test_composition_failure_skips_availability_queries(self, validator, reservations):
        result = validator.validate_for_creation(proposal(10, 12, crew=(2, 3)))
        assert result.reason == NO_PILOT_MESSAGE
        assert reservations.queries == []

    def test_aircraft_failure_skips_crew_queries(self, validator, reservations):
        reservations.book(ResourceKind.AIRCRAFT, AIRCRAFT_X, 10, 12, flight_id=7)
        reservations.book(ResourceKind.CREW, 1, 10, 12, flight_id=7)
        result = validator.validate_for_creation(proposal(11, 13))
        assert result.reason == AIRCRAFT_UNAVAILABLE_MESSAGE
        assert reservations.queries == [(ResourceKind.AIRCRAFT, AIRCRAFT_X)]

    def test_crew_checked_in_order_until_first_conflict(self, validator, reservations):
        reservations.book(ResourceKind.CREW, 2, 10, 12, flight_id=7)
        validator.validate_for_creation(proposal(11, 13, crew=(1, 2, 4, 5)))
        assert reservations.queries == [
            (ResourceKind.AIRCRAFT, AIRCRAFT_X),
            (ResourceKind.CREW, 1),
            (ResourceKind.CREW, 2),
        ]

    def test_explicit_now_overrides_clock(self, validator):
        assert validator.validate_for_creation(proposal(10, 12), now=at(11)).reason == DEPARTURE_IN_PAST_MESSAGE

    def test_validation_never_writes(self, validator, reservations):
        before = list(reservations.reservations)
        validator.validate_for_creation(proposal(10, 12))
        assert reservations.reservations == before

    def test_expired_deadline_raises(self, validator, reservations):
        with pytest.raises(ValidationDeadlineExceeded):
            validator.validate_for_creation(proposal(10, 12), deadline=time.monotonic() - 1)
        assert reservations.queries == []

    def test_generous_deadline_passes(self, validator):
        assert validator.validate_for_creation(proposal(10, 12), deadline=time.monotonic() + 60).is_valid

    def test_crew_assignment_ignores_own_flight(self, validator, reservations):
        reservations.book(ResourceKind.CREW, 1, 10, 12, flight_id=7)
        reservations.book(ResourceKind.CREW, 4, 10, 12, flight_id=8)

        assert validator.validate_crew_assignment(7, proposal(10, 12, crew=(1, 2))).is_valid
        result = validator.validate_crew_assignment(7, proposal(10, 12, crew=(4, 2)))
        assert "'Can Yilmaz'" in result.reason

    def test_collaborator_failure_propagates(self, crew_directory):
        validator = FlightValidator(BrokenReservations(), crew_directory, clock=lambda: NOW)
        with pytest.raises(ConnectionError):
            validator.validate_for_creation(proposal(10, 12))
