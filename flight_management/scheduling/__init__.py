"""
Scheduling conflict validation.

Each rule is a small function returning a RuleResult; FlightValidator runs
them in a fixed order and stops at the first failure.
"""

from .availability import AvailabilityChecker
from .crew_rules import validate_composition
from .time_rules import validate_airports, validate_flight_times, validate_times_and_route
from .validator import FlightValidator

__all__ = [
    'AvailabilityChecker',
    'FlightValidator',
    'validate_airports',
    'validate_composition',
    'validate_flight_times',
    'validate_times_and_route',
]
