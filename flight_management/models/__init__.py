"""
Data models for the flight_management package.

This package contains the entities tracked by the service (aircraft,
airports, crew members and flights), the scheduling value types consumed
by the validation rules, and the rule result type they return.
"""

from .aircraft import Aircraft
from .airport import Airport, AirportCoordinate
from .crew import CrewMember, CrewRole
from .flight import Flight, FlightStatus
from .navpoint import NavPoint
from .schedule import (
    FlightProposal,
    ResourceKind,
    ResourceReservation,
    TimeWindow,
)
from .validation import (
    RuleResult,
    FlightManagementError,
    FlightValidationError,
    FlightNotFoundError,
    RecordNotFoundError,
    ValidationDeadlineExceeded,
)

__all__ = [
    # Entities
    'Aircraft',
    'Airport',
    'AirportCoordinate',
    'CrewMember',
    'CrewRole',
    'Flight',
    'FlightStatus',
    'NavPoint',
    # Scheduling
    'FlightProposal',
    'ResourceKind',
    'ResourceReservation',
    'TimeWindow',
    # Validation
    'RuleResult',
    'FlightManagementError',
    'FlightValidationError',
    'FlightNotFoundError',
    'RecordNotFoundError',
    'ValidationDeadlineExceeded',
]
