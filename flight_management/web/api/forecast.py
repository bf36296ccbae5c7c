#!/usr/bin/env python3

from datetime import datetime
from fastapi import APIRouter, HTTPException, Query
from typing import Optional
import logging

from flight_management.forecasting.forecaster import ArrivalForecaster
from flight_management.storage.database_storage import DatabaseStorage
from .models import ArrivalEstimateResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Global references
forecaster: Optional[ArrivalForecaster] = None
storage: Optional[DatabaseStorage] = None

def set_context(f: ArrivalForecaster, db: DatabaseStorage):
    """Set the global forecaster and storage references."""
    global forecaster, storage
    forecaster = f
    storage = db

@router.get("/arrival", response_model=ArrivalEstimateResponse)
def estimate_arrival(
    departure: str = Query(..., description="Departure airport IATA code", min_length=3, max_length=3),
    arrival: str = Query(..., description="Arrival airport IATA code", min_length=3, max_length=3),
    departure_time: datetime = Query(..., description="Scheduled departure (ISO-8601, UTC if no offset)"),
    aircraft_model: Optional[str] = Query(None, description="Aircraft model for the cruise speed", max_length=100),
    aircraft_id: Optional[int] = Query(None, description="Use the model of this aircraft", ge=1)
):
    """
    Suggest an arrival time for a flight.

    The aircraft is given either by model name or by id. Unknown models fall
    back to a default cruise speed; unknown airports give a 404.
    """
    if not forecaster or not storage:
        raise HTTPException(status_code=500, detail="Service not initialised")

    if aircraft_model is None:
        if aircraft_id is None:
            raise HTTPException(status_code=400, detail="Either aircraft_model or aircraft_id is required.")
        aircraft = storage.get_aircraft(aircraft_id)
        if aircraft is None:
            raise HTTPException(status_code=404, detail="Aircraft not found.")
        aircraft_model = aircraft.model

    estimate = forecaster.estimate(departure, arrival, aircraft_model, departure_time)
    if estimate is None:
        raise HTTPException(status_code=404, detail="Arrival time could not be estimated.")
    return ArrivalEstimateResponse.from_estimate(estimate)
