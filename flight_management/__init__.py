"""
Flight operations scheduling library.

This package schedules flights against aircraft, airports and crew, and
refuses schedules that double-book a resource or break roster rules.

The main public API includes:
- FlightValidator: Ordered rule chain for flight creation and update
- AvailabilityChecker: Aircraft and crew conflict checks
- ArrivalForecaster: Arrival time estimate from distance and cruise speed
- DatabaseStorage: SQLite persistence for all entities
- FlightService: Validated flight writes on top of the storage
"""

from .forecasting import ArrivalForecaster, ForecastTables
from .models import FlightProposal, RuleResult, TimeWindow
from .scheduling import AvailabilityChecker, FlightValidator
from .services import FlightService
from .storage import DatabaseStorage

__version__ = '0.1.0'
__all__ = [
    'ArrivalForecaster',
    'AvailabilityChecker',
    'DatabaseStorage',
    'FlightProposal',
    'FlightService',
    'FlightValidator',
    'ForecastTables',
    'RuleResult',
    'TimeWindow',
]
