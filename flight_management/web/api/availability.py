#!/usr/bin/env python3

from datetime import datetime
from fastapi import APIRouter, HTTPException, Query, Path
from typing import Optional
import logging

from flight_management.models.schedule import ResourceKind, TimeWindow
from flight_management.scheduling.availability import AvailabilityChecker
from .models import AvailabilityResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Global checker reference
checker: Optional[AvailabilityChecker] = None

def set_context(c: AvailabilityChecker):
    """Set the global availability checker reference."""
    global checker
    checker = c

@router.get("/{kind}/{resource_id}", response_model=AvailabilityResponse)
def check_availability(
    kind: ResourceKind = Path(..., description="aircraft or crew"),
    resource_id: int = Path(..., ge=1),
    start: datetime = Query(..., description="Window start (ISO-8601, UTC if no offset)"),
    end: datetime = Query(..., description="Window end (ISO-8601, UTC if no offset)"),
    exclude_flight_id: Optional[int] = Query(None, description="Ignore this flight's own reservations", ge=1)
):
    """Whether an aircraft or crew member is free for the whole window."""
    if not checker:
        raise HTTPException(status_code=500, detail="Service not initialised")

    window = TimeWindow(start, end)
    available = checker.is_available(kind, resource_id, window, exclude_flight_id)
    return AvailabilityResponse(
        resource_kind=kind,
        resource_id=resource_id,
        start=window.start,
        end=window.end,
        exclude_flight_id=exclude_flight_id,
        available=available,
    )
