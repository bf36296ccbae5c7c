import logging
from typing import List

from ..models.crew import CrewRole
from ..models.validation import RuleResult
from ..storage.base import CrewDirectory

logger = logging.getLogger(__name__)

EMPTY_CREW_MESSAGE = "Flight must have at least 1 Pilot and 1 CoPilot."
NO_PILOT_MESSAGE = "at least 1 Pilot required"
NO_COPILOT_MESSAGE = "at least 1 CoPilot required"


def validate_composition(crew_member_ids: List[int], directory: CrewDirectory) -> RuleResult:
    """
    Check that a roster has at least one pilot and one copilot.

    Ids that do not resolve to a crew member are dropped without error, so a
    mistyped id silently shrinks the roster. Flight attendants are optional.
    The pilot check runs first and decides the message when both are missing.
    """
    if not crew_member_ids:
        logger.warning("Crew composition validation failed: No crew members assigned")
        return RuleResult.fail(EMPTY_CREW_MESSAGE)

    crew_members = directory.resolve_crew_members(crew_member_ids)

    pilots = sum(1 for c in crew_members if c.has_role(CrewRole.PILOT))
    if pilots == 0:
        logger.warning("Crew composition validation failed: No Pilot assigned")
        return RuleResult.fail(NO_PILOT_MESSAGE)

    copilots = sum(1 for c in crew_members if c.has_role(CrewRole.COPILOT))
    if copilots == 0:
        logger.warning("Crew composition validation failed: No CoPilot assigned")
        return RuleResult.fail(NO_COPILOT_MESSAGE)

    attendants = sum(1 for c in crew_members if c.has_role(CrewRole.FLIGHT_ATTENDANT))
    logger.debug(
        f"Crew composition validation passed: {pilots} Pilot(s), {copilots} CoPilot(s), "
        f"{attendants} Flight Attendant(s)"
    )
    return RuleResult.ok()
