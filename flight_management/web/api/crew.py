#!/usr/bin/env python3

from datetime import datetime
from fastapi import APIRouter, HTTPException, Query, Path, Response
from typing import List, Optional
import logging

from flight_management.models.schedule import TimeWindow
from flight_management.services.crew_service import CrewService
from .models import CrewRequest, CrewResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Global service reference
service: Optional[CrewService] = None

def set_context(s: CrewService):
    """Set the global service reference."""
    global service
    service = s

def _service() -> CrewService:
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialised")
    return service

@router.get("", response_model=List[CrewResponse])
def list_crew(role: Optional[str] = Query(None, description="Filter by role: pilot, copilot, flightattendant")):
    return [CrewResponse.from_crew(c) for c in _service().list_crew(role=role)]

@router.get("/available", response_model=List[CrewResponse])
def available_crew(
    start: datetime = Query(..., description="Window start (ISO-8601, UTC if no offset)"),
    end: datetime = Query(..., description="Window end (ISO-8601, UTC if no offset)"),
    role: Optional[str] = Query(None, description="Only return crew with this role")
):
    """Crew members with no flight overlapping the window."""
    window = TimeWindow(start, end)
    if window.end <= window.start:
        raise HTTPException(status_code=400, detail="End must be after start.")
    return [CrewResponse.from_crew(c) for c in _service().available_crew(window, role=role)]

@router.get("/{crew_id}", response_model=CrewResponse)
def get_crew_member(crew_id: int = Path(..., ge=1)):
    return CrewResponse.from_crew(_service().get_crew_member(crew_id))

@router.post("", response_model=CrewResponse, status_code=201)
def create_crew_member(body: CrewRequest):
    crew = _service().create_crew_member(body.first_name, body.last_name, body.role, body.license_number)
    return CrewResponse.from_crew(crew)

@router.put("/{crew_id}", response_model=CrewResponse)
def update_crew_member(body: CrewRequest, crew_id: int = Path(..., ge=1)):
    crew = _service().update_crew_member(
        crew_id, body.first_name, body.last_name, body.role, body.license_number
    )
    return CrewResponse.from_crew(crew)

@router.delete("/{crew_id}", status_code=204)
def delete_crew_member(crew_id: int = Path(..., ge=1)):
    _service().delete_crew_member(crew_id)
    return Response(status_code=204)
