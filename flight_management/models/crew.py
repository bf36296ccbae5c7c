from dataclasses import dataclass
from typing import Optional, Dict, Any


class CrewRole:
    """Crew roles. Stored lower-case, compared case-insensitively."""

    PILOT = "pilot"
    COPILOT = "copilot"
    FLIGHT_ATTENDANT = "flightattendant"

    ALL = (PILOT, COPILOT, FLIGHT_ATTENDANT)

    @classmethod
    def is_valid(cls, role: Optional[str]) -> bool:
        return bool(role) and role.strip().lower() in cls.ALL


@dataclass
class CrewMember:
    """Data class for storing crew member information."""

    first_name: str
    last_name: str
    role: str
    license_number: Optional[str] = None  # Applicable for pilots
    id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, role: str) -> bool:
        return (self.role or "").lower() == role.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'role': self.role,
            'license_number': self.license_number,
        }

    def __str__(self) -> str:
        return f"CrewMember({self.full_name}, {self.role})"
