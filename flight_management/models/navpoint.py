#!/usr/bin/env python3

import math
from typing import Optional, Tuple
from dataclasses import dataclass

@dataclass
class NavPoint:
    """
    A position used for great circle distance between airports.

    Latitude and longitude are decimal degrees. Distances are kilometers on
    a spherical earth of radius 6371 km.
    """

    latitude: float
    longitude: float
    name: Optional[str] = None

    EARTH_RADIUS_KM = 6371.0

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude must be between -90 and 90 degrees, got {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude must be between -180 and 180 degrees, got {self.longitude}")

    def _radians(self) -> Tuple[float, float]:
        return math.radians(self.latitude), math.radians(self.longitude)

    def distance_km(self, other: 'NavPoint') -> float:
        """Great circle distance to ``other`` using the haversine formula."""
        phi1, lambda1 = self._radians()
        phi2, lambda2 = other._radians()
        h = (math.sin((phi2 - phi1) / 2) ** 2
             + math.cos(phi1) * math.cos(phi2) * math.sin((lambda2 - lambda1) / 2) ** 2)
        return self.EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    def __str__(self) -> str:
        label = f"{self.name} " if self.name else ""
        return f"{label}({self.latitude:.4f}, {self.longitude:.4f})"
