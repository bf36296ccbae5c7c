"""
Persistence for the flight_management package.

The scheduling rules depend only on the query contracts in ``base``;
``DatabaseStorage`` is the SQLite implementation used by the service.
"""

from .base import AirportDirectory, CrewDirectory, ReservationQueries
from .database_storage import DatabaseStorage

__all__ = ['AirportDirectory', 'CrewDirectory', 'ReservationQueries', 'DatabaseStorage']
