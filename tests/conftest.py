import pytest
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from flight_management.models import (
    Aircraft, Airport, AirportCoordinate, CrewMember, CrewRole, FlightProposal,
    ResourceKind, ResourceReservation, TimeWindow
)
from flight_management.storage import AirportDirectory, CrewDirectory, DatabaseStorage, ReservationQueries

# Fixed "current time" for rule tests; every scheduled flight is on 2025-01-01
NOW = datetime(2025, 1, 1, 6, 0, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    """UTC time on January 2025."""
    return datetime(2025, 1, day, hour, minute, tzinfo=timezone.utc)


def window(start_hour: int, end_hour: int) -> TimeWindow:
    return TimeWindow(at(start_hour), at(end_hour))


class InMemoryReservations(ReservationQueries):
    """Reservation store backed by a list, recording every query it answers."""

    def __init__(self, reservations: Iterable[ResourceReservation] = ()):
        self.reservations = list(reservations)
        self.queries = []

    def book(self, kind: ResourceKind, resource_id: int, start_hour: int, end_hour: int,
             flight_id: Optional[int] = None) -> None:
        self.reservations.append(ResourceReservation(kind, resource_id, window(start_hour, end_hour), flight_id))

    def count_conflicting_reservations(self, resource_kind, resource_id, window, exclude_flight_id=None) -> int:
        self.queries.append((ResourceKind(resource_kind), resource_id))
        return sum(
            1 for r in self.reservations
            if r.resource_kind == resource_kind and r.resource_id == resource_id
            and r.conflicts_with(window, exclude_flight_id)
        )


class InMemoryCrew(CrewDirectory):

    def __init__(self, crew: Iterable[CrewMember] = ()):
        self.crew: Dict[int, CrewMember] = {c.id: c for c in crew}

    def resolve_crew_members(self, crew_ids) -> List[CrewMember]:
        return [self.crew[i] for i in crew_ids if i in self.crew]


class InMemoryAirports(AirportDirectory):

    def __init__(self, coordinates: Iterable[AirportCoordinate] = ()):
        self.coordinates = {c.iata_code: c for c in coordinates}

    def get_airport_coordinates(self, iata_code: str) -> Optional[AirportCoordinate]:
        return self.coordinates.get(iata_code)


@pytest.fixture
def crew_members() -> List[CrewMember]:
    return [
        CrewMember('Ayse', 'Kaya', CrewRole.PILOT, 'LIC-001', id=1),
        CrewMember('Mehmet', 'Demir', CrewRole.COPILOT, 'LIC-002', id=2),
        CrewMember('Elif', 'Sahin', CrewRole.FLIGHT_ATTENDANT, id=3),
        CrewMember('Can', 'Yilmaz', 'Pilot', 'LIC-004', id=4),
        CrewMember('Deniz', 'Arslan', 'COPILOT', 'LIC-005', id=5),
    ]


@pytest.fixture
def reservations() -> InMemoryReservations:
    return InMemoryReservations()


@pytest.fixture
def crew_directory(crew_members) -> InMemoryCrew:
    return InMemoryCrew(crew_members)


@pytest.fixture
def storage(tmp_path) -> DatabaseStorage:
    """A fresh SQLite database per test."""
    return DatabaseStorage(str(tmp_path / 'flights.db'))


@pytest.fixture
def seeded(storage) -> Dict[str, int]:
    """Two aircraft, three airports and five crew members; returns their ids by short name."""
    ids = {}
    ids['a320'] = storage.add_aircraft(Aircraft('Airbus A320', 'TC-JPA', 180)).id
    ids['b738'] = storage.add_aircraft(Aircraft('Boeing 737-800', 'TC-JGA', 189)).id

    ids['IST'] = storage.add_airport(Airport(
        'IST', 'Istanbul Airport', 'LTFM', 'TR', 'Istanbul', 'Turkey', 41.2753, 28.7519)).id
    ids['FRA'] = storage.add_airport(Airport(
        'FRA', 'Frankfurt am Main', 'EDDF', 'DE', 'Frankfurt', 'Germany', 50.0333, 8.5706)).id
    ids['ESB'] = storage.add_airport(Airport(
        'ESB', 'Ankara Esenboga', 'LTAC', 'TR', 'Ankara', 'Turkey', 40.1281, 32.9951)).id

    ids['pilot'] = storage.add_crew_member(CrewMember('Ayse', 'Kaya', 'pilot', 'LIC-001')).id
    ids['copilot'] = storage.add_crew_member(CrewMember('Mehmet', 'Demir', 'copilot', 'LIC-002')).id
    ids['attendant'] = storage.add_crew_member(CrewMember('Elif', 'Sahin', 'flightattendant')).id
    ids['pilot2'] = storage.add_crew_member(CrewMember('Can', 'Yilmaz', 'pilot', 'LIC-004')).id
    ids['copilot2'] = storage.add_crew_member(CrewMember('Deniz', 'Arslan', 'copilot', 'LIC-005')).id
    return ids


def make_proposal(seeded: Dict[str, int], start_hour: int, end_hour: int, aircraft: str = 'a320',
                  crew: Iterable[str] = ('pilot', 'copilot'), origin: str = 'IST', destination: str = 'FRA',
                  flight_number: str = 'TK1591', exclude_flight_id: Optional[int] = None) -> FlightProposal:
    return FlightProposal(
        flight_number=flight_number,
        departure_time=at(start_hour),
        arrival_time=at(end_hour),
        aircraft_id=seeded[aircraft],
        departure_airport_id=seeded[origin],
        arrival_airport_id=seeded[destination],
        crew_member_ids=[seeded[c] for c in crew],
        exclude_flight_id=exclude_flight_id,
    )
