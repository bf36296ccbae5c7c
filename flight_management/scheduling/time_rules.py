import logging
from datetime import datetime

from ..models.validation import RuleResult
from ..utils.timeutils import ensure_utc

logger = logging.getLogger(__name__)

ARRIVAL_BEFORE_DEPARTURE_MESSAGE = "Arrival must be after departure."
DEPARTURE_IN_PAST_MESSAGE = "Departure must be in the future."
SAME_AIRPORT_MESSAGE = "Departure and arrival airports cannot be the same."


def validate_flight_times(departure: datetime, arrival: datetime, now: datetime) -> RuleResult:
    departure, arrival, now = ensure_utc(departure), ensure_utc(arrival), ensure_utc(now)

    if arrival <= departure:
        logger.warning(
            f"Flight time validation failed: Arrival time ({arrival}) must be after departure time ({departure})"
        )
        return RuleResult.fail(ARRIVAL_BEFORE_DEPARTURE_MESSAGE)

    if departure <= now:
        logger.warning(
            f"Flight time validation failed: Departure time ({departure}) must be in the future. Current time: {now}"
        )
        return RuleResult.fail(DEPARTURE_IN_PAST_MESSAGE)

    return RuleResult.ok()


def validate_airports(departure_airport_id: int, arrival_airport_id: int) -> RuleResult:
    if departure_airport_id == arrival_airport_id:
        logger.warning(
            f"Airport validation failed: Departure and arrival airports are the same ({departure_airport_id})"
        )
        return RuleResult.fail(SAME_AIRPORT_MESSAGE)
    return RuleResult.ok()


def validate_times_and_route(
    departure: datetime,
    arrival: datetime,
    departure_airport_id: int,
    arrival_airport_id: int,
    now: datetime,
) -> RuleResult:
    """
    Chronology and route checks, in order:

    1. arrival strictly after departure
    2. departure strictly after ``now``
    3. departure airport differs from arrival airport

    Stops at the first failure. ``now`` is passed in rather than read from
    the clock so callers and tests control it.
    """
    result = validate_flight_times(departure, arrival, now)
    if not result.is_valid:
        return result
    return validate_airports(departure_airport_id, arrival_airport_id)
