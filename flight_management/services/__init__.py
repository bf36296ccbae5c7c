"""
Entity services.

Each service validates with RuleResult values and raises FlightValidationError
or RecordNotFoundError only when a write has to be refused.
"""

from .aircraft_service import AircraftService
from .airport_service import AirportService
from .crew_service import CrewService
from .flight_service import FlightService

__all__ = ['AircraftService', 'AirportService', 'CrewService', 'FlightService']
