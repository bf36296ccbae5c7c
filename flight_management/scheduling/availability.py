"""
Resource availability.

An aircraft or crew member is available for a window when no persisted
flight holding it overlaps that window. The check is a pure read against
the reservation store; it does not reserve anything.
"""

import logging
from typing import Optional

from ..models.schedule import ResourceKind, TimeWindow
from ..storage.base import ReservationQueries

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """Answers "is this resource free for this window?" from existing flights."""

    def __init__(self, reservations: ReservationQueries):
        self.reservations = reservations

    def is_available(
        self,
        resource_kind: ResourceKind,
        resource_id: int,
        window: TimeWindow,
        exclude_flight_id: Optional[int] = None,
    ) -> bool:
        """
        Check whether a resource has no overlapping reservation.

        Args:
            resource_kind: aircraft or crew
            resource_id: Identifier of the resource
            window: Proposed departure/arrival window
            exclude_flight_id: Flight to ignore, used when a flight is validated against itself

        Returns:
            True if no other flight holds the resource during ``window``
        """
        conflicts = self.reservations.count_conflicting_reservations(
            ResourceKind(resource_kind), resource_id, window, exclude_flight_id
        )
        available = conflicts == 0
        logger.debug(
            f"{ResourceKind(resource_kind).value} {resource_id} availability for {window}: "
            f"{available} (conflicts: {conflicts})"
        )
        return available

    def is_aircraft_available(self, aircraft_id: int, window: TimeWindow,
                              exclude_flight_id: Optional[int] = None) -> bool:
        return self.is_available(ResourceKind.AIRCRAFT, aircraft_id, window, exclude_flight_id)

    def is_crew_member_available(self, crew_id: int, window: TimeWindow,
                                 exclude_flight_id: Optional[int] = None) -> bool:
        return self.is_available(ResourceKind.CREW, crew_id, window, exclude_flight_id)
