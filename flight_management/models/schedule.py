from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any

from flight_management.utils.timeutils import ensure_utc


class ResourceKind(str, Enum):
    """Kind of resource a flight holds for the duration of its window."""

    AIRCRAFT = "aircraft"
    CREW = "crew"


@dataclass(frozen=True)
class TimeWindow:
    """
    A [start, end) interval in UTC.

    ``end > start`` is not enforced here: the flight time rule is what
    rejects inverted windows, so a window can be built from raw input first.
    """

    start: datetime
    end: datetime

    def __post_init__(self):
        object.__setattr__(self, 'start', ensure_utc(self.start))
        object.__setattr__(self, 'end', ensure_utc(self.end))

    def overlaps(self, other: 'TimeWindow') -> bool:
        """True if the two windows intersect. Touching endpoints do not."""
        return self.start < other.end and self.end > other.start

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

    def __str__(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


@dataclass(frozen=True)
class ResourceReservation:
    """An existing flight's claim on an aircraft or crew member."""

    resource_kind: ResourceKind
    resource_id: int
    window: TimeWindow
    flight_id: Optional[int] = None

    def conflicts_with(self, window: TimeWindow, exclude_flight_id: Optional[int] = None) -> bool:
        if exclude_flight_id is not None and self.flight_id == exclude_flight_id:
            return False
        return self.window.overlaps(window)


@dataclass
class FlightProposal:
    """A flight as submitted for creation or update, before it is persisted."""

    flight_number: str
    departure_time: datetime
    arrival_time: datetime
    aircraft_id: int
    departure_airport_id: int
    arrival_airport_id: int
    crew_member_ids: List[int] = field(default_factory=list)
    exclude_flight_id: Optional[int] = None

    def __post_init__(self):
        self.departure_time = ensure_utc(self.departure_time)
        self.arrival_time = ensure_utc(self.arrival_time)
        self.crew_member_ids = list(self.crew_member_ids or [])

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.departure_time, self.arrival_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flight_number': self.flight_number,
            'departure_time': self.departure_time.isoformat(),
            'arrival_time': self.arrival_time.isoformat(),
            'aircraft_id': self.aircraft_id,
            'departure_airport_id': self.departure_airport_id,
            'arrival_airport_id': self.arrival_airport_id,
            'crew_member_ids': list(self.crew_member_ids),
            'exclude_flight_id': self.exclude_flight_id,
        }
