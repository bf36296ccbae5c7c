"""
Arrival time forecasting.

The estimate is taxi-out at the departure airport, plus the airborne time at
cruise speed over the great circle distance, plus taxi-in at the arrival
airport. It is a suggestion for pre-filling a flight; it never gates a write.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from ..storage.base import AirportDirectory
from ..utils.timeutils import ensure_utc
from .tables import ForecastTables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArrivalEstimate:
    """An arrival estimate with the figures it was derived from."""

    departure_iata: str
    arrival_iata: str
    aircraft_model: str
    departure_time: datetime
    arrival_time: datetime
    distance_km: float
    cruise_speed_kmh: float
    flight_minutes: int
    taxi_out_minutes: int
    taxi_in_minutes: int

    @property
    def total_minutes(self) -> int:
        return self.taxi_out_minutes + self.flight_minutes + self.taxi_in_minutes

    def to_dict(self) -> Dict[str, Any]:
        return {
            'departure_iata': self.departure_iata,
            'arrival_iata': self.arrival_iata,
            'aircraft_model': self.aircraft_model,
            'departure_time': self.departure_time.isoformat(),
            'arrival_time': self.arrival_time.isoformat(),
            'distance_km': round(self.distance_km, 1),
            'cruise_speed_kmh': self.cruise_speed_kmh,
            'flight_minutes': self.flight_minutes,
            'taxi_out_minutes': self.taxi_out_minutes,
            'taxi_in_minutes': self.taxi_in_minutes,
            'total_minutes': self.total_minutes,
        }


class ArrivalForecaster:
    """
    Estimates arrival times.

    Args:
        tables: Cruise speed and taxi time tables, loaded once at start-up
        airports: Resolves IATA codes to coordinates
    """

    def __init__(self, tables: ForecastTables, airports: AirportDirectory):
        self.tables = tables
        self.airports = airports

    def estimate(
        self,
        departure_iata: str,
        arrival_iata: str,
        aircraft_model: str,
        departure_time: datetime,
    ) -> Optional[ArrivalEstimate]:
        """
        Estimate the arrival of a flight.

        Args:
            departure_iata: IATA code of the departure airport
            arrival_iata: IATA code of the arrival airport
            aircraft_model: Model name used to look up the cruise speed
            departure_time: Scheduled departure

        Returns:
            ArrivalEstimate, or None if either airport cannot be resolved to coordinates

        Note:
            Airborne minutes use Python's ``round``, which rounds halves to
            the nearest even number.
        """
        departure_iata = (departure_iata or "").strip().upper()
        arrival_iata = (arrival_iata or "").strip().upper()

        departure = self.airports.get_airport_coordinates(departure_iata)
        if departure is None:
            logger.warning(f"Airport {departure_iata} not found in airports data")
            return None

        arrival = self.airports.get_airport_coordinates(arrival_iata)
        if arrival is None:
            logger.warning(f"Airport {arrival_iata} not found in airports data")
            return None

        distance_km = departure.navpoint.distance_km(arrival.navpoint)
        speed_kmh = self.tables.cruise_speed(aircraft_model)
        flight_minutes = int(round(distance_km / speed_kmh * 60))

        taxi_out = self.tables.taxi_out(departure_iata)
        taxi_in = self.tables.taxi_in(arrival_iata)

        departure_time = ensure_utc(departure_time)
        total_minutes = taxi_out + flight_minutes + taxi_in
        arrival_time = departure_time + timedelta(minutes=total_minutes)

        logger.info(
            f"Flight forecast: {departure_iata}->{arrival_iata}, "
            f"Distance: {distance_km:.0f}km, Speed: {speed_kmh:.0f}km/h, "
            f"Flight: {flight_minutes}min, Taxi: {taxi_out}+{taxi_in}min, "
            f"Total: {total_minutes}min"
        )

        return ArrivalEstimate(
            departure_iata=departure_iata,
            arrival_iata=arrival_iata,
            aircraft_model=aircraft_model,
            departure_time=departure_time,
            arrival_time=arrival_time,
            distance_km=distance_km,
            cruise_speed_kmh=speed_kmh,
            flight_minutes=flight_minutes,
            taxi_out_minutes=taxi_out,
            taxi_in_minutes=taxi_in,
        )

    def estimate_arrival(
        self,
        departure_iata: str,
        arrival_iata: str,
        aircraft_model: str,
        departure_time: datetime,
    ) -> Optional[datetime]:
        """Estimated arrival time, or None when it cannot be computed."""
        estimate = self.estimate(departure_iata, arrival_iata, aircraft_model, departure_time)
        return estimate.arrival_time if estimate else None
