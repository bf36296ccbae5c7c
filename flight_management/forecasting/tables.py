"""
Static lookup tables for arrival forecasting.

Cruise speeds are keyed by aircraft model name, taxi times by IATA code with
a ``"default"`` entry for airports not listed. Tables are loaded once at
start-up, wrapped read-only, and passed to the forecaster explicitly.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / 'data'
DEFAULT_SPEEDS_FILE = DATA_DIR / 'aircraft_speeds.json'
DEFAULT_TAXI_TIMES_FILE = DATA_DIR / 'airport_taxi_times.json'

DEFAULT_CRUISE_SPEED_KMH = 840  # Typical narrowbody cruise speed
DEFAULT_TAXI_KEY = "default"
DEFAULT_TAXI_OUT_MINUTES = 15
DEFAULT_TAXI_IN_MINUTES = 7


@dataclass(frozen=True)
class TaxiTime:
    """Ground movement minutes at an airport."""

    taxi_out: int
    taxi_in: int


@dataclass(frozen=True)
class ForecastTables:
    """Read-only cruise speed and taxi time tables."""

    aircraft_speeds: Mapping[str, float] = field(default_factory=dict)
    taxi_times: Mapping[str, TaxiTime] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'aircraft_speeds', MappingProxyType(dict(self.aircraft_speeds)))
        object.__setattr__(self, 'taxi_times', MappingProxyType(dict(self.taxi_times)))

    def cruise_speed(self, aircraft_model: str) -> float:
        """Cruise speed in km/h, or the default when the model is not listed or its speed is unusable."""
        speed = self.aircraft_speeds.get(aircraft_model)
        if speed is None:
            logger.warning(
                f"Aircraft model '{aircraft_model}' not found, using default speed {DEFAULT_CRUISE_SPEED_KMH} km/h"
            )
            return DEFAULT_CRUISE_SPEED_KMH
        # Also rejects NaN
        if not speed > 0:
            logger.warning(
                f"Aircraft model '{aircraft_model}' has invalid speed {speed}, "
                f"using default speed {DEFAULT_CRUISE_SPEED_KMH} km/h"
            )
            return DEFAULT_CRUISE_SPEED_KMH
        return speed

    def taxi_out(self, iata_code: str) -> int:
        times = self.taxi_times.get(iata_code) or self.taxi_times.get(DEFAULT_TAXI_KEY)
        return times.taxi_out if times else DEFAULT_TAXI_OUT_MINUTES

    def taxi_in(self, iata_code: str) -> int:
        times = self.taxi_times.get(iata_code) or self.taxi_times.get(DEFAULT_TAXI_KEY)
        return times.taxi_in if times else DEFAULT_TAXI_IN_MINUTES

    @classmethod
    def from_dicts(cls, aircraft_speeds: Optional[Mapping[str, Any]] = None,
                   taxi_times: Optional[Mapping[str, Any]] = None) -> 'ForecastTables':
        """
        Build tables from plain data.

        ``taxi_times`` values can be TaxiTime instances, ``{"taxiOut": .., "taxiIn": ..}``
        dicts, or ``(taxi_out, taxi_in)`` pairs.
        """
        speeds = {str(k): float(v) for k, v in (aircraft_speeds or {}).items()}
        taxi = {str(k): _to_taxi_time(v) for k, v in (taxi_times or {}).items()}
        return cls(aircraft_speeds=speeds, taxi_times=taxi)

    @classmethod
    def load(cls, speeds_path: Optional[Union[str, Path]] = None,
             taxi_times_path: Optional[Union[str, Path]] = None) -> 'ForecastTables':
        """Load both tables from JSON files, defaulting to the packaged data."""
        speeds = load_aircraft_speeds(speeds_path or DEFAULT_SPEEDS_FILE)
        taxi = load_taxi_times(taxi_times_path or DEFAULT_TAXI_TIMES_FILE)
        logger.info(f"Loaded {len(speeds)} aircraft speeds and {len(taxi)} taxi time entries")
        return cls(aircraft_speeds=speeds, taxi_times=taxi)


def _to_taxi_time(value: Any) -> TaxiTime:
    if isinstance(value, TaxiTime):
        return value
    if isinstance(value, Mapping):
        return TaxiTime(
            taxi_out=int(value.get('taxiOut', value.get('taxi_out'))),
            taxi_in=int(value.get('taxiIn', value.get('taxi_in'))),
        )
    taxi_out, taxi_in = value
    return TaxiTime(int(taxi_out), int(taxi_in))


def _read_json(path: Union[str, Path]) -> Any:
    with Path(path).open('r', encoding='utf-8') as f:
        return json.load(f)


def load_aircraft_speeds(path: Union[str, Path]) -> Dict[str, float]:
    """Load ``{"model": km_per_hour}``. Any error yields an empty table."""
    try:
        data = _read_json(path)
        return {str(model): float(speed) for model, speed in data.items()}
    except Exception as e:
        logger.error(f"Error loading aircraft speeds data from {path}: {e}")
        return {}


def load_taxi_times(path: Union[str, Path]) -> Dict[str, TaxiTime]:
    """Load ``{"IATA": {"taxiOut": m, "taxiIn": m}}``. Any error yields an empty table."""
    try:
        data = _read_json(path)
        return {str(code): _to_taxi_time(times) for code, times in data.items()}
    except Exception as e:
        logger.error(f"Error loading taxi times data from {path}: {e}")
        return {}
