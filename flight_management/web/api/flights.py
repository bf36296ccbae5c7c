#!/usr/bin/env python3

from datetime import datetime
from fastapi import APIRouter, HTTPException, Query, Path, Response
from typing import List, Optional
import logging

from flight_management.models.flight import Flight
from flight_management.services.flight_service import FlightService
from flight_management.storage.database_storage import DatabaseStorage
from .models import (
    CrewAssignmentRequest, FlightRequest, FlightResponse, FlightStatusRequest,
    FlightUpdateRequest, ValidationResponse
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Global references
service: Optional[FlightService] = None
storage: Optional[DatabaseStorage] = None

def set_context(s: FlightService, db: DatabaseStorage):
    """Set the global service and storage references."""
    global service, storage
    service = s
    storage = db

def _service() -> FlightService:
    if not service or not storage:
        raise HTTPException(status_code=500, detail="Service not initialised")
    return service

def _to_response(flight: Flight) -> FlightResponse:
    """Expand a flight with its aircraft, airports and crew."""
    return FlightResponse.from_flight(
        flight,
        aircraft=storage.get_aircraft(flight.aircraft_id),
        departure_airport=storage.get_airport(flight.departure_airport_id),
        arrival_airport=storage.get_airport(flight.arrival_airport_id),
        crew_members=storage.resolve_crew_members(flight.crew_member_ids),
    )

@router.get("", response_model=List[FlightResponse])
def list_flights(
    aircraft_id: Optional[int] = Query(None, description="Only flights flown by this aircraft", ge=1),
    crew_id: Optional[int] = Query(None, description="Only flights with this crew member", ge=1),
    airport_id: Optional[int] = Query(None, description="Only flights departing from or arriving at this airport", ge=1),
    start: Optional[datetime] = Query(None, description="Only flights departing at or after this time"),
    end: Optional[datetime] = Query(None, description="Only flights arriving at or before this time")
):
    """Get flights ordered by departure time, with optional filters."""
    flights = _service().list_flights(
        aircraft_id=aircraft_id, crew_id=crew_id, airport_id=airport_id, start=start, end=end
    )
    logger.debug(f"Flights listed. Count: {len(flights)}")
    return [_to_response(f) for f in flights]

@router.post("/validate", response_model=ValidationResponse)
def validate_flight(body: FlightRequest):
    """Run the creation rules against a flight without saving it."""
    return ValidationResponse.from_result(_service().validate_creation(body.to_proposal()))

@router.get("/{flight_id}", response_model=FlightResponse)
def get_flight(flight_id: int = Path(..., ge=1)):
    return _to_response(_service().get_flight(flight_id))

@router.post("", response_model=FlightResponse, status_code=201)
def create_flight(body: FlightRequest):
    flight = _service().create_flight(body.to_proposal())
    return _to_response(flight)

@router.put("/{flight_id}", response_model=FlightResponse)
def update_flight(body: FlightUpdateRequest, flight_id: int = Path(..., ge=1)):
    flight = _service().update_flight(
        flight_id,
        body.to_proposal(exclude_flight_id=flight_id),
        status=body.status,
        status_description=body.status_description,
    )
    return _to_response(flight)

@router.patch("/{flight_id}/status", response_model=FlightResponse)
def update_flight_status(body: FlightStatusRequest, flight_id: int = Path(..., ge=1)):
    flight = _service().update_status(flight_id, body.status, body.status_description)
    return _to_response(flight)

@router.post("/{flight_id}/assign-crew", response_model=FlightResponse)
def assign_crew(body: CrewAssignmentRequest, flight_id: int = Path(..., ge=1)):
    flight = _service().assign_crew(flight_id, body.crew_member_ids)
    return _to_response(flight)

@router.delete("/{flight_id}", status_code=204)
def delete_flight(flight_id: int = Path(..., ge=1)):
    _service().delete_flight(flight_id)
    return Response(status_code=204)
