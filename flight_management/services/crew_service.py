import logging
from typing import List, Optional

from ..models.crew import CrewMember, CrewRole
from ..models.schedule import TimeWindow
from ..models.validation import FlightValidationError, RecordNotFoundError, RuleResult
from ..storage.database_storage import DatabaseStorage

logger = logging.getLogger(__name__)

INVALID_ROLE_MESSAGE = "Invalid crew member role."


class CrewService:
    """Crew roster management."""

    def __init__(self, storage: DatabaseStorage):
        self.storage = storage

    def validate_creation(self, first_name: str, last_name: str, role: str,
                          license_number: Optional[str] = None) -> RuleResult:
        return self._validate(first_name, last_name, role, license_number, None)

    def validate_update(self, crew_id: int, first_name: str, last_name: str, role: str,
                        license_number: Optional[str] = None) -> RuleResult:
        return self._validate(first_name, last_name, role, license_number, crew_id)

    def _validate(self, first_name, last_name, role, license_number, crew_id) -> RuleResult:
        if not first_name or not first_name.strip():
            return RuleResult.fail("First name is required.")
        if not last_name or not last_name.strip():
            return RuleResult.fail("Last name is required.")

        if not CrewRole.is_valid(role):
            logger.warning(f"Crew validation failed: Invalid role {role}")
            return RuleResult.fail(INVALID_ROLE_MESSAGE)

        if license_number and not self.storage.is_license_number_unique(license_number, crew_id):
            logger.warning(f"Crew validation failed: License number {license_number} already exists")
            return RuleResult.fail(f"A crew member with license number '{license_number}' already exists.")

        return RuleResult.ok()

    def can_delete(self, crew_id: int) -> RuleResult:
        if self.storage.has_flights_for_crew(crew_id):
            logger.warning(f"Cannot delete crew member {crew_id}: Assigned to flights")
            return RuleResult.fail("Cannot delete crew member that is assigned to flights.")
        return RuleResult.ok()

    def list_crew(self, role: Optional[str] = None) -> List[CrewMember]:
        return self.storage.list_crew(role=role)

    def get_crew_member(self, crew_id: int) -> CrewMember:
        crew = self.storage.get_crew_member(crew_id)
        if crew is None:
            raise RecordNotFoundError("Crew member", crew_id)
        return crew

    def available_crew(self, window: TimeWindow, role: Optional[str] = None) -> List[CrewMember]:
        """Crew members with no flight overlapping ``window``, optionally of one role."""
        crew = self.storage.get_available_crew(window)
        if role:
            crew = [c for c in crew if c.has_role(role)]
        logger.debug(f"{len(crew)} crew members available during {window}")
        return crew

    def create_crew_member(self, first_name: str, last_name: str, role: str,
                           license_number: Optional[str] = None) -> CrewMember:
        result = self.validate_creation(first_name, last_name, role, license_number)
        if not result:
            raise FlightValidationError(result.reason, result)
        return self.storage.add_crew_member(CrewMember(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=role.strip().lower(),
            license_number=license_number or None,
        ))

    def update_crew_member(self, crew_id: int, first_name: str, last_name: str, role: str,
                           license_number: Optional[str] = None) -> CrewMember:
        crew = self.get_crew_member(crew_id)
        result = self.validate_update(crew_id, first_name, last_name, role, license_number)
        if not result:
            raise FlightValidationError(result.reason, result)

        crew.first_name = first_name.strip()
        crew.last_name = last_name.strip()
        crew.role = role.strip().lower()
        crew.license_number = license_number or None
        self.storage.update_crew_member(crew)
        logger.info(f"Crew member updated: {crew.id} {crew.full_name} ({crew.role})")
        return crew

    def delete_crew_member(self, crew_id: int) -> None:
        self.get_crew_member(crew_id)
        result = self.can_delete(crew_id)
        if not result:
            raise FlightValidationError(result.reason, result)
        self.storage.delete_crew_member(crew_id)
        logger.info(f"Crew member deleted: {crew_id}")
