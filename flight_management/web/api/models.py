#!/usr/bin/env python3

"""
Pydantic models for API requests and responses, built from the
flight_management domain models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from flight_management.forecasting.forecaster import ArrivalEstimate
from flight_management.models.aircraft import Aircraft
from flight_management.models.airport import Airport
from flight_management.models.crew import CrewMember
from flight_management.models.flight import Flight
from flight_management.models.schedule import FlightProposal, ResourceKind
from flight_management.models.validation import RuleResult


class AircraftRequest(BaseModel):
    """Body for creating or updating an aircraft."""

    model: str = Field(..., max_length=100)
    tail_number: str = Field(..., max_length=20)
    seats_capacity: int
    is_active: bool = True


class AircraftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    model: str
    tail_number: str
    seats_capacity: int
    is_active: bool

    @classmethod
    def from_aircraft(cls, aircraft: Aircraft):
        return cls(
            id=aircraft.id,
            model=aircraft.model,
            tail_number=aircraft.tail_number,
            seats_capacity=aircraft.seats_capacity,
            is_active=aircraft.is_active,
        )


class AirportRequest(BaseModel):
    """Body for creating or updating an airport."""

    iata_code: str
    name: str = Field(..., max_length=200)
    icao_code: Optional[str] = None
    country_code: Optional[str] = Field(None, max_length=3)
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_airport(self) -> Airport:
        return Airport(
            iata_code=self.iata_code,
            name=self.name,
            icao_code=self.icao_code,
            country_code=self.country_code,
            city=self.city,
            country=self.country,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class AirportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    iata_code: str
    name: str
    icao_code: Optional[str]
    country_code: Optional[str]
    city: Optional[str]
    country: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]

    @classmethod
    def from_airport(cls, airport: Airport):
        return cls(**airport.to_dict())


class CrewRequest(BaseModel):
    """Body for creating or updating a crew member."""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    role: str = Field(..., max_length=30)
    license_number: Optional[str] = Field(None, max_length=50)


class CrewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    role: str
    license_number: Optional[str]

    @classmethod
    def from_crew(cls, crew: CrewMember):
        return cls(
            id=crew.id,
            first_name=crew.first_name,
            last_name=crew.last_name,
            full_name=crew.full_name,
            role=crew.role,
            license_number=crew.license_number,
        )


class FlightRequest(BaseModel):
    """Body for creating a flight or for a dry-run validation."""

    flight_number: str = Field(..., max_length=20)
    departure_time: datetime
    arrival_time: datetime
    aircraft_id: int
    departure_airport_id: int
    arrival_airport_id: int
    crew_member_ids: List[int] = Field(default_factory=list)

    def to_proposal(self, exclude_flight_id: Optional[int] = None) -> FlightProposal:
        return FlightProposal(
            flight_number=self.flight_number,
            departure_time=self.departure_time,
            arrival_time=self.arrival_time,
            aircraft_id=self.aircraft_id,
            departure_airport_id=self.departure_airport_id,
            arrival_airport_id=self.arrival_airport_id,
            crew_member_ids=list(self.crew_member_ids),
            exclude_flight_id=exclude_flight_id,
        )


class FlightUpdateRequest(FlightRequest):
    status: Optional[str] = None
    status_description: Optional[str] = Field(None, max_length=500)


class FlightStatusRequest(BaseModel):
    status: str
    status_description: Optional[str] = Field(None, max_length=500)


class CrewAssignmentRequest(BaseModel):
    crew_member_ids: List[int]


class FlightResponse(BaseModel):
    """A flight with its aircraft, airports and crew expanded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    flight_number: str
    departure_time: datetime
    arrival_time: datetime
    aircraft_id: int
    departure_airport_id: int
    arrival_airport_id: int
    status: str
    status_description: Optional[str]
    crew_member_ids: List[int]
    aircraft: Optional[AircraftResponse] = None
    departure_airport: Optional[AirportResponse] = None
    arrival_airport: Optional[AirportResponse] = None
    crew_members: List[CrewResponse] = Field(default_factory=list)

    @classmethod
    def from_flight(
        cls,
        flight: Flight,
        aircraft: Optional[Aircraft] = None,
        departure_airport: Optional[Airport] = None,
        arrival_airport: Optional[Airport] = None,
        crew_members: Optional[List[CrewMember]] = None,
    ):
        return cls(
            id=flight.id,
            flight_number=flight.flight_number,
            departure_time=flight.departure_time,
            arrival_time=flight.arrival_time,
            aircraft_id=flight.aircraft_id,
            departure_airport_id=flight.departure_airport_id,
            arrival_airport_id=flight.arrival_airport_id,
            status=flight.status,
            status_description=flight.status_description,
            crew_member_ids=list(flight.crew_member_ids),
            aircraft=AircraftResponse.from_aircraft(aircraft) if aircraft else None,
            departure_airport=AirportResponse.from_airport(departure_airport) if departure_airport else None,
            arrival_airport=AirportResponse.from_airport(arrival_airport) if arrival_airport else None,
            crew_members=[CrewResponse.from_crew(c) for c in crew_members or []],
        )


class ValidationResponse(BaseModel):
    is_valid: bool
    reason: str = ""

    @classmethod
    def from_result(cls, result: RuleResult):
        return cls(is_valid=result.is_valid, reason=result.reason)


class AvailabilityResponse(BaseModel):
    resource_kind: ResourceKind
    resource_id: int
    start: datetime
    end: datetime
    exclude_flight_id: Optional[int] = None
    available: bool


class ArrivalEstimateResponse(BaseModel):
    """Estimated arrival with the distance, speed and taxi figures behind it."""

    model_config = ConfigDict(from_attributes=True)

    departure_iata: str
    arrival_iata: str
    aircraft_model: str
    departure_time: datetime
    arrival_time: datetime
    distance_km: float
    cruise_speed_kmh: float
    flight_minutes: int
    taxi_out_minutes: int
    taxi_in_minutes: int
    total_minutes: int

    @classmethod
    def from_estimate(cls, estimate: ArrivalEstimate):
        return cls(
            departure_iata=estimate.departure_iata,
            arrival_iata=estimate.arrival_iata,
            aircraft_model=estimate.aircraft_model,
            departure_time=estimate.departure_time,
            arrival_time=estimate.arrival_time,
            distance_km=round(estimate.distance_km, 1),
            cruise_speed_kmh=estimate.cruise_speed_kmh,
            flight_minutes=estimate.flight_minutes,
            taxi_out_minutes=estimate.taxi_out_minutes,
            taxi_in_minutes=estimate.taxi_in_minutes,
            total_minutes=estimate.total_minutes,
        )
