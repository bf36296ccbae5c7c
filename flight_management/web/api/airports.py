#!/usr/bin/env python3

from fastapi import APIRouter, HTTPException, Query, Path, Response
from typing import List, Optional
import logging

from flight_management.services.airport_service import AirportService
from .models import AirportRequest, AirportResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Global service reference
service: Optional[AirportService] = None

def set_context(s: AirportService):
    """Set the global service reference."""
    global service
    service = s

def _service() -> AirportService:
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialised")
    return service

@router.get("", response_model=List[AirportResponse])
def list_airports(
    city: Optional[str] = Query(None, description="Filter by city", max_length=100),
    country: Optional[str] = Query(None, description="Filter by country", max_length=100)
):
    """Get airports, optionally filtered by city or country."""
    return [AirportResponse.from_airport(a) for a in _service().list_airports(city=city, country=country)]

@router.get("/iata/{iata_code}", response_model=AirportResponse)
def get_airport_by_iata(iata_code: str = Path(..., min_length=3, max_length=3)):
    return AirportResponse.from_airport(_service().get_airport_by_iata(iata_code))

@router.get("/{airport_id}", response_model=AirportResponse)
def get_airport(airport_id: int = Path(..., ge=1)):
    return AirportResponse.from_airport(_service().get_airport(airport_id))

@router.post("", response_model=AirportResponse, status_code=201)
def create_airport(body: AirportRequest):
    return AirportResponse.from_airport(_service().create_airport(body.to_airport()))

@router.put("/{airport_id}", response_model=AirportResponse)
def update_airport(body: AirportRequest, airport_id: int = Path(..., ge=1)):
    return AirportResponse.from_airport(_service().update_airport(airport_id, body.to_airport()))

@router.delete("/{airport_id}", status_code=204)
def delete_airport(airport_id: int = Path(..., ge=1)):
    _service().delete_airport(airport_id)
    return Response(status_code=204)
