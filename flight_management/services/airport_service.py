import logging
import re
from typing import List, Optional

from ..models.airport import Airport
from ..models.validation import FlightValidationError, RecordNotFoundError, RuleResult
from ..storage.database_storage import DatabaseStorage

logger = logging.getLogger(__name__)

IATA_PATTERN = re.compile(r'^[A-Za-z]{3}$')
ICAO_PATTERN = re.compile(r'^[A-Za-z]{4}$')


class AirportService:
    """
    Airport registry.

    IATA and ICAO codes are normalised to upper case before they are stored,
    so uniqueness is effectively case-insensitive.
    """

    def __init__(self, storage: DatabaseStorage):
        self.storage = storage

    def validate_creation(self, iata_code: str, icao_code: Optional[str] = None,
                          latitude: Optional[float] = None, longitude: Optional[float] = None) -> RuleResult:
        return self._validate(iata_code, icao_code, latitude, longitude, None)

    def validate_update(self, airport_id: int, iata_code: str, icao_code: Optional[str] = None,
                        latitude: Optional[float] = None, longitude: Optional[float] = None) -> RuleResult:
        return self._validate(iata_code, icao_code, latitude, longitude, airport_id)

    def _validate(self, iata_code, icao_code, latitude, longitude, airport_id) -> RuleResult:
        if not iata_code or not IATA_PATTERN.match(iata_code):
            logger.warning(f"Airport validation failed: Invalid IATA code format {iata_code}")
            return RuleResult.fail("IATA code must be exactly 3 letters.")

        if icao_code and not ICAO_PATTERN.match(icao_code):
            logger.warning(f"Airport validation failed: Invalid ICAO code format {icao_code}")
            return RuleResult.fail("ICAO code must be exactly 4 letters.")

        if latitude is not None and not -90 <= latitude <= 90:
            return RuleResult.fail("Latitude must be between -90 and 90.")

        if longitude is not None and not -180 <= longitude <= 180:
            return RuleResult.fail("Longitude must be between -180 and 180.")

        if not self.storage.is_iata_code_unique(iata_code, airport_id):
            logger.warning(f"Airport validation failed: IATA code {iata_code} already exists")
            return RuleResult.fail(f"An airport with IATA code '{iata_code.upper()}' already exists.")

        return RuleResult.ok()

    def can_delete(self, airport_id: int) -> RuleResult:
        if self.storage.has_flights_for_airport(airport_id):
            logger.warning(f"Cannot delete airport {airport_id}: Assigned to flights")
            return RuleResult.fail("Cannot delete airport that is used by flights.")
        return RuleResult.ok()

    def list_airports(self, city: Optional[str] = None, country: Optional[str] = None) -> List[Airport]:
        return self.storage.list_airports(city=city, country=country)

    def get_airport(self, airport_id: int) -> Airport:
        airport = self.storage.get_airport(airport_id)
        if airport is None:
            raise RecordNotFoundError("Airport", airport_id)
        return airport

    def get_airport_by_iata(self, iata_code: str) -> Airport:
        airport = self.storage.get_airport_by_iata(iata_code)
        if airport is None:
            raise RecordNotFoundError("Airport", iata_code)
        return airport

    def create_airport(self, airport: Airport) -> Airport:
        result = self.validate_creation(airport.iata_code, airport.icao_code, airport.latitude, airport.longitude)
        if not result:
            raise FlightValidationError(result.reason, result)
        self._normalise(airport)
        return self.storage.add_airport(airport)

    def update_airport(self, airport_id: int, airport: Airport) -> Airport:
        self.get_airport(airport_id)
        result = self.validate_update(
            airport_id, airport.iata_code, airport.icao_code, airport.latitude, airport.longitude
        )
        if not result:
            raise FlightValidationError(result.reason, result)
        airport.id = airport_id
        self._normalise(airport)
        self.storage.update_airport(airport)
        logger.info(f"Airport updated: {airport.id} {airport.name} ({airport.iata_code})")
        return airport

    def delete_airport(self, airport_id: int) -> None:
        self.get_airport(airport_id)
        result = self.can_delete(airport_id)
        if not result:
            raise FlightValidationError(result.reason, result)
        self.storage.delete_airport(airport_id)
        logger.info(f"Airport deleted: {airport_id}")

    @staticmethod
    def _normalise(airport: Airport) -> None:
        airport.iata_code = airport.iata_code.upper()
        if airport.icao_code:
            airport.icao_code = airport.icao_code.upper()
        else:
            airport.icao_code = None
