"""
Composite validation of flight proposals.

A proposal is checked by an ordered list of steps. The first failing step
decides the outcome and its reason is returned verbatim; steps after it are
never run, so their queries are never issued. Validation never writes.
"""

import logging
import time
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ..models.schedule import FlightProposal
from ..models.validation import RuleResult, ValidationDeadlineExceeded
from ..storage.base import CrewDirectory, ReservationQueries
from ..utils.timeutils import utc_now
from .availability import AvailabilityChecker
from .crew_rules import validate_composition
from .time_rules import validate_times_and_route

logger = logging.getLogger(__name__)

AIRCRAFT_UNAVAILABLE_MESSAGE = "Aircraft is already assigned to another flight during this time period."

Step = Tuple[str, Callable[[], RuleResult]]


class FlightValidator:
    """
    Validates flights for creation and update.

    Args:
        reservations: Reservation store queried for aircraft/crew conflicts
        crew_directory: Crew lookups for roster roles and conflict messages
        clock: Returns the current UTC time when a caller does not pass ``now``
    """

    def __init__(
        self,
        reservations: ReservationQueries,
        crew_directory: CrewDirectory,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.availability = AvailabilityChecker(reservations)
        self.crew_directory = crew_directory
        self.clock = clock

    def validate_for_creation(
        self,
        proposal: FlightProposal,
        now: Optional[datetime] = None,
        deadline: Optional[float] = None,
    ) -> RuleResult:
        """Validate a new flight. No existing flight is excluded from conflict checks."""
        result = self._run(self._steps(proposal, None, now), deadline)
        if result.is_valid:
            logger.info(f"Flight creation validation passed for {proposal.flight_number}")
        return result

    def validate_for_update(
        self,
        flight_id: int,
        proposal: FlightProposal,
        now: Optional[datetime] = None,
        deadline: Optional[float] = None,
    ) -> RuleResult:
        """
        Validate an edit of ``flight_id``.

        Same steps as creation, except the availability checks ignore the
        flight's own reservations so it does not conflict with itself. The
        "departure must be in the future" rule still applies.
        """
        result = self._run(self._steps(proposal, flight_id, now), deadline)
        if result.is_valid:
            logger.info(f"Flight update validation passed for flight {flight_id}")
        return result

    def validate_crew_assignment(
        self,
        flight_id: int,
        proposal: FlightProposal,
        deadline: Optional[float] = None,
    ) -> RuleResult:
        """Validate replacing the crew of an existing flight, keeping its times."""
        exclude = flight_id
        steps: List[Step] = [
            ("crew composition", lambda: validate_composition(proposal.crew_member_ids, self.crew_directory)),
            ("crew availability", lambda: self._check_crew_availability(proposal, exclude)),
        ]
        return self._run(steps, deadline)

    def _steps(self, proposal: FlightProposal, exclude_flight_id: Optional[int],
               now: Optional[datetime]) -> List[Step]:
        current = now if now is not None else self.clock()
        return [
            ("times and route", lambda: validate_times_and_route(
                proposal.departure_time,
                proposal.arrival_time,
                proposal.departure_airport_id,
                proposal.arrival_airport_id,
                current,
            )),
            ("crew composition", lambda: validate_composition(proposal.crew_member_ids, self.crew_directory)),
            ("aircraft availability", lambda: self._check_aircraft_availability(proposal, exclude_flight_id)),
            ("crew availability", lambda: self._check_crew_availability(proposal, exclude_flight_id)),
        ]

    def _run(self, steps: List[Step], deadline: Optional[float]) -> RuleResult:
        for name, step in steps:
            if deadline is not None and time.monotonic() > deadline:
                raise ValidationDeadlineExceeded(f"Validation deadline exceeded before step '{name}'")
            result = step()
            if not result.is_valid:
                logger.debug(f"Validation stopped at step '{name}': {result.reason}")
                return result
        return RuleResult.ok()

    def _check_aircraft_availability(self, proposal: FlightProposal,
                                     exclude_flight_id: Optional[int]) -> RuleResult:
        if self.availability.is_aircraft_available(proposal.aircraft_id, proposal.window, exclude_flight_id):
            return RuleResult.ok()
        logger.warning(
            f"Aircraft availability validation failed: Aircraft {proposal.aircraft_id} is already assigned "
            f"to another flight during {proposal.window}"
        )
        return RuleResult.fail(AIRCRAFT_UNAVAILABLE_MESSAGE)

    def _check_crew_availability(self, proposal: FlightProposal,
                                 exclude_flight_id: Optional[int]) -> RuleResult:
        # List order matters: the first unavailable member names the error
        for crew_id in proposal.crew_member_ids:
            if self.availability.is_crew_member_available(crew_id, proposal.window, exclude_flight_id):
                continue
            crew_name = self._crew_display_name(crew_id)
            logger.warning(
                f"Crew availability validation failed: Crew member {crew_id} ({crew_name}) is already "
                f"assigned to another flight during {proposal.window}"
            )
            return RuleResult.fail(
                f"Crew member '{crew_name}' is already assigned to another flight during this time period."
            )
        return RuleResult.ok()

    def _crew_display_name(self, crew_id: int) -> str:
        resolved = self.crew_directory.resolve_crew_members([crew_id])
        if resolved:
            return resolved[0].full_name
        return f"ID:{crew_id}"
