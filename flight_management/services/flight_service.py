import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from ..models.flight import Flight, FlightStatus
from ..models.schedule import FlightProposal
from ..models.validation import FlightNotFoundError, FlightValidationError, RuleResult
from ..scheduling.validator import FlightValidator
from ..storage.database_storage import DatabaseStorage
from ..utils.timeutils import utc_now

logger = logging.getLogger(__name__)

INVALID_STATUS_MESSAGE = "Invalid flight status."


class FlightService:
    """
    Flight scheduling on top of the validator and the database.

    Every write runs the full rule chain first and raises
    FlightValidationError with the first failing reason. Validation and the
    write that follows are separate database operations, so two concurrent
    writers can both pass validation; closing that gap is left to the
    database.

    Args:
        storage: Database holding flights and their resources
        validator: Rule chain; built from ``storage`` when omitted
        validation_timeout: Seconds a validation may take before it is abandoned
        clock: Current time source, used for "departure must be in the future"
    """

    def __init__(
        self,
        storage: DatabaseStorage,
        validator: Optional[FlightValidator] = None,
        validation_timeout: Optional[float] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.storage = storage
        self.validator = validator or FlightValidator(storage, storage, clock=clock)
        self.validation_timeout = validation_timeout

    def _deadline(self) -> Optional[float]:
        if self.validation_timeout is None:
            return None
        return time.monotonic() + self.validation_timeout

    # Queries

    def list_flights(
        self,
        aircraft_id: Optional[int] = None,
        crew_id: Optional[int] = None,
        airport_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Flight]:
        return self.storage.list_flights(
            aircraft_id=aircraft_id, crew_id=crew_id, airport_id=airport_id, start=start, end=end
        )

    def get_flight(self, flight_id: int) -> Flight:
        flight = self.storage.get_flight(flight_id)
        if flight is None:
            logger.warning(f"Flight not found: {flight_id}")
            raise FlightNotFoundError(flight_id)
        return flight

    # Validation

    def check_references(self, proposal: FlightProposal) -> RuleResult:
        """Check that the aircraft and both airports of a proposal exist."""
        if self.storage.get_aircraft(proposal.aircraft_id) is None:
            logger.warning(f"Invalid aircraft ID: {proposal.aircraft_id}")
            return RuleResult.fail("Invalid aircraft ID.")
        if self.storage.get_airport(proposal.departure_airport_id) is None:
            logger.warning(f"Invalid departure airport ID: {proposal.departure_airport_id}")
            return RuleResult.fail("Invalid departure airport ID.")
        if self.storage.get_airport(proposal.arrival_airport_id) is None:
            logger.warning(f"Invalid arrival airport ID: {proposal.arrival_airport_id}")
            return RuleResult.fail("Invalid arrival airport ID.")
        return RuleResult.ok()

    def validate_creation(self, proposal: FlightProposal, now: Optional[datetime] = None) -> RuleResult:
        result = self.check_references(proposal)
        if not result:
            return result
        return self.validator.validate_for_creation(proposal, now=now, deadline=self._deadline())

    def validate_update(self, flight_id: int, proposal: FlightProposal,
                        now: Optional[datetime] = None) -> RuleResult:
        result = self.check_references(proposal)
        if not result:
            return result
        return self.validator.validate_for_update(flight_id, proposal, now=now, deadline=self._deadline())

    # Writes

    def create_flight(self, proposal: FlightProposal, now: Optional[datetime] = None) -> Flight:
        result = self.validate_creation(proposal, now=now)
        if not result:
            raise FlightValidationError(result.reason, result)

        flight = Flight(
            flight_number=proposal.flight_number,
            departure_time=proposal.departure_time,
            arrival_time=proposal.arrival_time,
            aircraft_id=proposal.aircraft_id,
            departure_airport_id=proposal.departure_airport_id,
            arrival_airport_id=proposal.arrival_airport_id,
            crew_member_ids=list(proposal.crew_member_ids),
            status=FlightStatus.PLANNED,
        )
        return self.storage.add_flight(flight)

    def update_flight(
        self,
        flight_id: int,
        proposal: FlightProposal,
        status: Optional[str] = None,
        status_description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Flight:
        flight = self.get_flight(flight_id)
        proposal.exclude_flight_id = flight_id

        result = self.validate_update(flight_id, proposal, now=now)
        if not result:
            raise FlightValidationError(result.reason, result)

        flight.flight_number = proposal.flight_number
        flight.departure_time = proposal.departure_time
        flight.arrival_time = proposal.arrival_time
        flight.aircraft_id = proposal.aircraft_id
        flight.departure_airport_id = proposal.departure_airport_id
        flight.arrival_airport_id = proposal.arrival_airport_id
        flight.crew_member_ids = list(proposal.crew_member_ids)
        if status is not None:
            flight.status = self._canonical_status(status)
            flight.status_description = status_description

        self.storage.update_flight(flight)
        return flight

    def update_status(self, flight_id: int, status: str, status_description: Optional[str] = None) -> Flight:
        """Change the operational status. Status changes skip the scheduling rules."""
        flight = self.get_flight(flight_id)
        flight.status = self._canonical_status(status)
        flight.status_description = status_description
        self.storage.update_flight_status(flight_id, flight.status, status_description)
        logger.info(f"Flight status updated: {flight_id} -> {flight.status}")
        return flight

    def assign_crew(self, flight_id: int, crew_member_ids: List[int]) -> Flight:
        """Replace the crew of a flight, re-checking roster and crew availability."""
        flight = self.get_flight(flight_id)
        proposal = FlightProposal(
            flight_number=flight.flight_number,
            departure_time=flight.departure_time,
            arrival_time=flight.arrival_time,
            aircraft_id=flight.aircraft_id,
            departure_airport_id=flight.departure_airport_id,
            arrival_airport_id=flight.arrival_airport_id,
            crew_member_ids=crew_member_ids,
            exclude_flight_id=flight_id,
        )
        result = self.validator.validate_crew_assignment(flight_id, proposal, deadline=self._deadline())
        if not result:
            raise FlightValidationError(result.reason, result)

        self.storage.set_flight_crew(flight_id, proposal.crew_member_ids)
        logger.info(f"Crew assigned to flight {flight_id}: {proposal.crew_member_ids}")
        return self.get_flight(flight_id)

    def delete_flight(self, flight_id: int) -> None:
        if not self.storage.delete_flight(flight_id):
            logger.warning(f"Flight not found for delete: {flight_id}")
            raise FlightNotFoundError(flight_id)
        logger.info(f"Flight deleted: {flight_id}")

    @staticmethod
    def _canonical_status(status: str) -> str:
        for known in FlightStatus.ALL:
            if (status or "").strip().lower() == known.lower():
                return known
        raise FlightValidationError(INVALID_STATUS_MESSAGE)
