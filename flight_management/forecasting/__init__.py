"""Arrival time forecasting from great circle distance, cruise speed and taxi times."""

from .forecaster import ArrivalEstimate, ArrivalForecaster
from .tables import ForecastTables, TaxiTime, load_aircraft_speeds, load_taxi_times

__all__ = [
    'ArrivalEstimate',
    'ArrivalForecaster',
    'ForecastTables',
    'TaxiTime',
    'load_aircraft_speeds',
    'load_taxi_times',
]
