import logging
from typing import List

from ..models.aircraft import Aircraft
from ..models.validation import FlightValidationError, RecordNotFoundError, RuleResult
from ..storage.database_storage import DatabaseStorage

logger = logging.getLogger(__name__)


class AircraftService:
    """Aircraft registry: validation, CRUD and soft deletion."""

    def __init__(self, storage: DatabaseStorage):
        self.storage = storage

    def validate_creation(self, tail_number: str, seats_capacity: int) -> RuleResult:
        return self._validate(tail_number, seats_capacity, None)

    def validate_update(self, aircraft_id: int, tail_number: str, seats_capacity: int) -> RuleResult:
        return self._validate(tail_number, seats_capacity, aircraft_id)

    def _validate(self, tail_number: str, seats_capacity: int, aircraft_id) -> RuleResult:
        if not tail_number or not tail_number.strip():
            logger.warning(f"Aircraft validation failed: Tail number is empty (aircraft {aircraft_id})")
            return RuleResult.fail("Tail number is required.")

        if seats_capacity is None or seats_capacity <= 0:
            logger.warning(f"Aircraft validation failed: Invalid seats capacity {seats_capacity}")
            return RuleResult.fail("Seats capacity must be greater than 0.")

        if not self.storage.is_tail_number_unique(tail_number, aircraft_id):
            logger.warning(f"Aircraft validation failed: Tail number {tail_number} already exists")
            return RuleResult.fail(f"An aircraft with tail number '{tail_number}' already exists.")

        return RuleResult.ok()

    def can_delete(self, aircraft_id: int) -> RuleResult:
        if self.storage.get_aircraft(aircraft_id) is None:
            return RuleResult.fail("Aircraft not found.")
        if self.storage.has_flights_for_aircraft(aircraft_id):
            logger.warning(f"Cannot delete aircraft {aircraft_id}: Used in flights")
            return RuleResult.fail(
                "Cannot delete aircraft that is assigned to flights. Consider deactivating instead."
            )
        return RuleResult.ok()

    def list_aircraft(self, active_only: bool = False) -> List[Aircraft]:
        return self.storage.list_aircraft(active_only=active_only)

    def get_aircraft(self, aircraft_id: int) -> Aircraft:
        aircraft = self.storage.get_aircraft(aircraft_id)
        if aircraft is None:
            raise RecordNotFoundError("Aircraft", aircraft_id)
        return aircraft

    def create_aircraft(self, model: str, tail_number: str, seats_capacity: int) -> Aircraft:
        result = self.validate_creation(tail_number, seats_capacity)
        if not result:
            raise FlightValidationError(result.reason, result)
        return self.storage.add_aircraft(
            Aircraft(model=model, tail_number=tail_number.strip(), seats_capacity=seats_capacity)
        )

    def update_aircraft(self, aircraft_id: int, model: str, tail_number: str,
                        seats_capacity: int, is_active: bool = True) -> Aircraft:
        aircraft = self.get_aircraft(aircraft_id)
        result = self.validate_update(aircraft_id, tail_number, seats_capacity)
        if not result:
            raise FlightValidationError(result.reason, result)

        aircraft.model = model
        aircraft.tail_number = tail_number.strip()
        aircraft.seats_capacity = seats_capacity
        aircraft.is_active = is_active
        self.storage.update_aircraft(aircraft)
        logger.info(f"Aircraft updated: {aircraft.id} {aircraft.tail_number} - Active: {aircraft.is_active}")
        return aircraft

    def deactivate_aircraft(self, aircraft_id: int) -> Aircraft:
        """Soft delete: keep the record (and its flights) but mark it inactive."""
        aircraft = self.get_aircraft(aircraft_id)
        aircraft.is_active = False
        self.storage.update_aircraft(aircraft)
        logger.info(f"Aircraft deactivated: {aircraft.id} {aircraft.tail_number}")
        return aircraft

    def delete_aircraft(self, aircraft_id: int) -> None:
        self.get_aircraft(aircraft_id)
        result = self.can_delete(aircraft_id)
        if not result:
            raise FlightValidationError(result.reason, result)
        self.storage.delete_aircraft(aircraft_id)
        logger.info(f"Aircraft deleted: {aircraft_id}")
