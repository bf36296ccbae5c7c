"""
Validation results for scheduling rules.

Every rule returns a RuleResult instead of raising: either ``ok`` or a
failure carrying exactly one human readable reason. Exceptions are kept for
the service boundary, where a failed result has to stop a write.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union


@dataclass(frozen=True)
class RuleResult:
    """Outcome of a single rule or of a composite rule chain."""

    is_valid: bool
    reason: str = ""

    @classmethod
    def ok(cls) -> 'RuleResult':
        """Create a passing result."""
        return cls(True, "")

    @classmethod
    def fail(cls, reason: str) -> 'RuleResult':
        """Create a failing result with a reason."""
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.is_valid

    def __iter__(self) -> Iterator[Union[bool, str]]:
        # Allows ``ok, reason = result``
        yield self.is_valid
        yield self.reason

    def __str__(self) -> str:
        if self.is_valid:
            return "Valid"
        return f"Invalid: {self.reason}"


class FlightManagementError(Exception):
    """Base class for errors raised at the service boundary."""


class FlightValidationError(FlightManagementError):
    """Raised when a write is refused because a rule failed."""

    def __init__(self, reason: str, result: Optional[RuleResult] = None):
        super().__init__(reason)
        self.reason = reason
        self.result = result if result is not None else RuleResult.fail(reason)


class RecordNotFoundError(FlightManagementError):
    """Raised when an aircraft, airport, crew member or flight id does not exist."""

    def __init__(self, record_type: str, record_id: Union[int, str]):
        super().__init__(f"{record_type} {record_id} not found.")
        self.record_type = record_type
        self.record_id = record_id


class FlightNotFoundError(RecordNotFoundError):
    """Raised when a flight id does not exist."""

    def __init__(self, flight_id: int):
        super().__init__("Flight", flight_id)
        self.flight_id = flight_id


class ValidationDeadlineExceeded(FlightManagementError):
    """Raised when a rule chain runs past the caller supplied deadline."""
