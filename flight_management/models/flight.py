from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Any

from flight_management.models.schedule import TimeWindow
from flight_management.utils.timeutils import ensure_utc


class FlightStatus:
    """Operational status values a flight can take."""

    PLANNED = "Planned"
    DELAYED = "Delayed"
    CANCELLED = "Cancelled"
    DEPARTED = "Departed"
    ARRIVED = "Arrived"

    ALL = (PLANNED, DELAYED, CANCELLED, DEPARTED, ARRIVED)


@dataclass
class Flight:
    """A persisted flight with its aircraft, airports and crew assignment."""

    flight_number: str
    departure_time: datetime
    arrival_time: datetime
    aircraft_id: int
    departure_airport_id: int
    arrival_airport_id: int
    crew_member_ids: List[int] = field(default_factory=list)
    status: str = FlightStatus.PLANNED
    status_description: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.departure_time = ensure_utc(self.departure_time)
        self.arrival_time = ensure_utc(self.arrival_time)

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.departure_time, self.arrival_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'flight_number': self.flight_number,
            'departure_time': self.departure_time.isoformat(),
            'arrival_time': self.arrival_time.isoformat(),
            'aircraft_id': self.aircraft_id,
            'departure_airport_id': self.departure_airport_id,
            'arrival_airport_id': self.arrival_airport_id,
            'crew_member_ids': list(self.crew_member_ids),
            'status': self.status,
            'status_description': self.status_description,
        }

    def __str__(self) -> str:
        return f"Flight({self.flight_number}, {self.departure_time.isoformat()})"
