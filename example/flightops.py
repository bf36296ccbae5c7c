#!/usr/bin/env python3

import argparse
import json
import logging
import sys
from typing import List

from flight_management.forecasting import ArrivalForecaster, ForecastTables
from flight_management.models import Airport, FlightProposal, FlightManagementError
from flight_management.services import AircraftService, AirportService, CrewService, FlightService
from flight_management.storage import DatabaseStorage
from flight_management.utils import parse_timestamp

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class Command:
    """Runs one flight operations command against a database."""

    def __init__(self, args):
        self.args = args
        self.storage = DatabaseStorage(args.database)

    def _require(self, count: int, usage: str) -> List[str]:
        if len(self.args.arguments) < count:
            logger.error(f'Usage: {self.args.command} {usage}')
            sys.exit(2)
        return self.args.arguments

    def _print(self, data):
        print(json.dumps(data, indent=2, default=str))

    def run_init(self):
        """Create the schema (idempotent) and show what the database holds."""
        self._print(self.storage.get_database_info())

    def run_add_airport(self):
        iata, name, lat, lon = self._require(4, 'IATA NAME LATITUDE LONGITUDE')[:4]
        airport = AirportService(self.storage).create_airport(
            Airport(iata_code=iata, name=name, latitude=float(lat), longitude=float(lon))
        )
        self._print(airport.to_dict())

    def run_add_aircraft(self):
        model, tail_number, seats = self._require(3, 'MODEL TAIL_NUMBER SEATS')[:3]
        aircraft = AircraftService(self.storage).create_aircraft(model, tail_number, int(seats))
        self._print(aircraft.to_dict())

    def run_add_crew(self):
        args = self._require(3, 'FIRST_NAME LAST_NAME ROLE [LICENSE_NUMBER]')
        license_number = args[3] if len(args) > 3 else None
        crew = CrewService(self.storage).create_crew_member(args[0], args[1], args[2], license_number)
        self._print(crew.to_dict())

    def run_schedule(self):
        args = self._require(
            6, 'FLIGHT_NUMBER AIRCRAFT_ID DEPARTURE_IATA ARRIVAL_IATA DEPARTURE ARRIVAL [CREW_ID ...]'
        )
        airports = AirportService(self.storage)
        proposal = FlightProposal(
            flight_number=args[0],
            aircraft_id=int(args[1]),
            departure_airport_id=airports.get_airport_by_iata(args[2]).id,
            arrival_airport_id=airports.get_airport_by_iata(args[3]).id,
            departure_time=parse_timestamp(args[4]),
            arrival_time=parse_timestamp(args[5]),
            crew_member_ids=[int(c) for c in args[6:]],
        )
        service = FlightService(self.storage)
        if self.args.dry_run:
            result = service.validate_creation(proposal)
            self._print({'is_valid': result.is_valid, 'reason': result.reason})
        else:
            self._print(service.create_flight(proposal).to_dict())

    def run_flights(self):
        flights = FlightService(self.storage).list_flights(
            aircraft_id=self.args.aircraft_id,
            crew_id=self.args.crew_id,
        )
        self._print([f.to_dict() for f in flights])

    def run_forecast(self):
        dep, arr, model, departure_time = self._require(4, 'DEPARTURE_IATA ARRIVAL_IATA MODEL DEPARTURE_TIME')[:4]
        tables = ForecastTables.load(self.args.speeds, self.args.taxi_times)
        estimate = ArrivalForecaster(tables, self.storage).estimate(dep, arr, model, parse_timestamp(departure_time))
        if estimate is None:
            logger.error('Arrival time could not be estimated.')
            sys.exit(1)
        self._print(estimate.to_dict())

    def run(self):
        """Run the specified command."""
        try:
            getattr(self, f'run_{self.args.command.replace("-", "_")}')()
        except FlightManagementError as e:
            logger.error(str(e))
            sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='Flight operations management tool')
    parser.add_argument('command', help='Command to execute', choices=[
        'init', 'add-airport', 'add-aircraft', 'add-crew', 'schedule', 'flights', 'forecast'
    ])
    parser.add_argument('arguments', help='Command arguments', nargs='*')
    parser.add_argument('-d', '--database', help='SQLite database file', default='flights.db')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    parser.add_argument('-n', '--dry-run', help='Validate a flight without saving it', action='store_true')
    parser.add_argument('--aircraft-id', help='Only flights flown by this aircraft', type=int)
    parser.add_argument('--crew-id', help='Only flights with this crew member', type=int)
    parser.add_argument('--speeds', help='Aircraft cruise speeds JSON file')
    parser.add_argument('--taxi-times', help='Airport taxi times JSON file')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    cmd = Command(args)
    cmd.run()


if __name__ == '__main__':
    main()
