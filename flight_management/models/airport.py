from dataclasses import dataclass
from typing import Optional, Dict, Any

from flight_management.models.navpoint import NavPoint


@dataclass(frozen=True)
class AirportCoordinate:
    """Position of an airport, keyed by IATA code. Used by the arrival forecaster."""

    iata_code: str
    latitude: float
    longitude: float

    @property
    def navpoint(self) -> NavPoint:
        return NavPoint(latitude=self.latitude, longitude=self.longitude, name=self.iata_code)


@dataclass
class Airport:
    """Data class for storing airport information."""

    iata_code: str  # 3-letter code
    name: str
    icao_code: Optional[str] = None  # 4-letter code, optional
    country_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    id: Optional[int] = None

    @property
    def coordinate(self) -> Optional[AirportCoordinate]:
        """Coordinate of this airport, or None when latitude/longitude are missing."""
        if self.latitude is None or self.longitude is None:
            return None
        return AirportCoordinate(self.iata_code, self.latitude, self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'iata_code': self.iata_code,
            'icao_code': self.icao_code,
            'name': self.name,
            'country_code': self.country_code,
            'city': self.city,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }

    def __str__(self) -> str:
        return f"Airport({self.iata_code}, {self.name})"
