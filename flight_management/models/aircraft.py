from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class Aircraft:
    """Data class for storing aircraft information."""

    model: str  # e.g. "Airbus A320", key into the cruise speed table
    tail_number: str
    seats_capacity: int
    is_active: bool = True
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'model': self.model,
            'tail_number': self.tail_number,
            'seats_capacity': self.seats_capacity,
            'is_active': self.is_active,
        }

    def __str__(self) -> str:
        return f"Aircraft({self.tail_number}, {self.model})"
