from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..models.airport import AirportCoordinate
from ..models.crew import CrewMember
from ..models.schedule import ResourceKind, TimeWindow


class ReservationQueries(ABC):
    """Query contract used by the availability checker."""

    @abstractmethod
    def count_conflicting_reservations(
        self,
        resource_kind: ResourceKind,
        resource_id: int,
        window: TimeWindow,
        exclude_flight_id: Optional[int] = None,
    ) -> int:
        """
        Count existing flights holding ``resource_id`` whose window overlaps ``window``.

        Args:
            resource_kind: Whether ``resource_id`` is an aircraft or a crew member
            resource_id: Identifier of the aircraft or crew member
            window: Proposed window; overlap is ``start < window.end and end > window.start``
            exclude_flight_id: Flight whose reservations must not be counted

        Returns:
            Number of conflicting flights
        """
        pass


class CrewDirectory(ABC):
    """Crew lookups used by the crew composition rule and conflict messages."""

    @abstractmethod
    def resolve_crew_members(self, crew_ids: Iterable[int]) -> List[CrewMember]:
        """
        Resolve crew ids to records, in the order given.

        Unknown ids yield no entry; they are dropped, not reported.
        """
        pass


class AirportDirectory(ABC):
    """Airport coordinate lookups used by the arrival forecaster."""

    @abstractmethod
    def get_airport_coordinates(self, iata_code: str) -> Optional[AirportCoordinate]:
        """
        Get the coordinates of an airport by IATA code.

        Returns:
            AirportCoordinate, or None when the airport is unknown or has no position
        """
        pass
