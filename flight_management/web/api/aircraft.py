#!/usr/bin/env python3

from fastapi import APIRouter, HTTPException, Query, Path, Response
from typing import List, Optional
import logging

from flight_management.services.aircraft_service import AircraftService
from .models import AircraftRequest, AircraftResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Global service reference
service: Optional[AircraftService] = None

def set_context(s: AircraftService):
    """Set the global service reference."""
    global service
    service = s

def _service() -> AircraftService:
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialised")
    return service

@router.get("", response_model=List[AircraftResponse])
def list_aircraft(active_only: bool = Query(False, description="Only return active aircraft")):
    """Get all aircraft, optionally only the active ones."""
    return [AircraftResponse.from_aircraft(a) for a in _service().list_aircraft(active_only=active_only)]

@router.get("/{aircraft_id}", response_model=AircraftResponse)
def get_aircraft(aircraft_id: int = Path(..., ge=1)):
    return AircraftResponse.from_aircraft(_service().get_aircraft(aircraft_id))

@router.post("", response_model=AircraftResponse, status_code=201)
def create_aircraft(body: AircraftRequest):
    aircraft = _service().create_aircraft(body.model, body.tail_number, body.seats_capacity)
    if not body.is_active:
        aircraft = _service().deactivate_aircraft(aircraft.id)
    return AircraftResponse.from_aircraft(aircraft)

@router.put("/{aircraft_id}", response_model=AircraftResponse)
def update_aircraft(body: AircraftRequest, aircraft_id: int = Path(..., ge=1)):
    aircraft = _service().update_aircraft(
        aircraft_id, body.model, body.tail_number, body.seats_capacity, body.is_active
    )
    return AircraftResponse.from_aircraft(aircraft)

@router.post("/{aircraft_id}/deactivate", response_model=AircraftResponse)
def deactivate_aircraft(aircraft_id: int = Path(..., ge=1)):
    """Soft delete an aircraft that still has flights."""
    return AircraftResponse.from_aircraft(_service().deactivate_aircraft(aircraft_id))

@router.delete("/{aircraft_id}", status_code=204)
def delete_aircraft(aircraft_id: int = Path(..., ge=1)):
    _service().delete_aircraft(aircraft_id)
    return Response(status_code=204)
