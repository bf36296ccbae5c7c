#!/usr/bin/env python3

import sqlite3
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flight_management.forecasting.forecaster import ArrivalForecaster
from flight_management.forecasting.tables import ForecastTables
from flight_management.models.validation import (
    FlightValidationError, RecordNotFoundError, ValidationDeadlineExceeded
)
from flight_management.scheduling.availability import AvailabilityChecker
from flight_management.services import AircraftService, AirportService, CrewService, FlightService
from flight_management.storage.database_storage import DatabaseStorage
from flight_management.utils.timeutils import utc_now

from flight_management.web.config import (
    ALLOWED_ORIGINS, AIRCRAFT_SPEEDS_FILE, DB_TIMEOUT_SECONDS, LOG_FORMAT, LOG_LEVEL,
    SECURITY_HEADERS, TAXI_TIMES_FILE, VALIDATION_DEADLINE_SECONDS, get_safe_db_path
)
from flight_management.web.api import aircraft, airports, availability, crew, flights, forecast

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
logger = logging.getLogger(__name__)

def init_services(storage: DatabaseStorage, tables: ForecastTables,
                  validation_timeout: Optional[float] = None) -> None:
    """Build the services around ``storage`` and hand them to the API routes."""
    aircraft.set_context(AircraftService(storage))
    airports.set_context(AirportService(storage))
    crew.set_context(CrewService(storage))
    flights.set_context(FlightService(storage, validation_timeout=validation_timeout), storage)
    availability.set_context(AvailabilityChecker(storage))
    forecast.set_context(ArrivalForecaster(tables, storage), storage)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app."""
    # Startup
    logger.info("Starting up Flight Management API...")

    db_path = get_safe_db_path()

    try:
        storage = DatabaseStorage(db_path, timeout=DB_TIMEOUT_SECONDS)
        tables = ForecastTables.load(AIRCRAFT_SPEEDS_FILE, TAXI_TIMES_FILE)
        init_services(storage, tables, VALIDATION_DEADLINE_SECONDS)
        logger.info(f"Database ready at {db_path}: {storage.get_database_info()}")
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Failed to open database: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down Flight Management API...")


# Create FastAPI app with lifespan context manager
app = FastAPI(
    title="Flight Management API",
    description="Scheduling of flights, aircraft, airports and crew with conflict validation",
    version="1.0.0",
    lifespan=lifespan
)


# Domain errors to HTTP responses
@app.exception_handler(FlightValidationError)
async def validation_error_handler(request: Request, exc: FlightValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.reason})


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationDeadlineExceeded)
async def deadline_handler(request: Request, exc: ValidationDeadlineExceeded):
    logger.warning(f"{request.method} {request.url.path} - {exc}")
    return JSONResponse(status_code=503, content={"detail": "Validation timed out. Please retry."})


@app.exception_handler(sqlite3.IntegrityError)
async def integrity_error_handler(request: Request, exc: sqlite3.IntegrityError):
    # A uniqueness or reference check raced with another writer
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=409, content={"detail": "The change conflicts with existing data."})


# Add security headers middleware
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)

    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value

    return response


# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client_ip = request.client.host if request.client else "unknown"
    logger.info(
        f"{request.method} {request.url.path} - "
        f"{response.status_code} - {process_time:.3f}s - {client_ip}"
    )
    return response


# Add CORS middleware with restricted origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(aircraft.router, prefix="/api/aircraft", tags=["aircraft"])
app.include_router(airports.router, prefix="/api/airport", tags=["airports"])
app.include_router(crew.router, prefix="/api/crew", tags=["crew"])
app.include_router(flights.router, prefix="/api/flight", tags=["flights"])
app.include_router(availability.router, prefix="/api/availability", tags=["availability"])
app.include_router(forecast.router, prefix="/api/forecast", tags=["forecast"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat()
    }


def main():
    uvicorn.run(
        "flight_management.web.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
