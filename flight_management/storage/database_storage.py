#!/usr/bin/env python3

import sqlite3
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Any
from datetime import datetime
from contextlib import contextmanager

from ..models.aircraft import Aircraft
from ..models.airport import Airport, AirportCoordinate
from ..models.crew import CrewMember
from ..models.flight import Flight, FlightStatus
from ..models.schedule import ResourceKind, TimeWindow
from ..utils.timeutils import parse_timestamp, to_storage, utc_now
from .base import AirportDirectory, CrewDirectory, ReservationQueries
from .schema import get_schema_sql, SCHEMA_VERSION

logger = logging.getLogger(__name__)

class DatabaseStorage(ReservationQueries, CrewDirectory, AirportDirectory):
    """
    SQLite storage for aircraft, airports, crew members and flights.

    Every public method opens its own connection, so an instance can be
    shared between request threads. Conflict checks here are plain reads:
    two writers racing on the same aircraft can both pass validation, and
    only a database level constraint could serialise them.
    """

    def __init__(self, database_path: str, timeout: float = 5.0):
        """
        Initialize the database storage.

        Args:
            database_path: Path to the SQLite database file
            timeout: Seconds a statement waits on a locked database before failing
        """
        self.database_path = Path(database_path)
        self.timeout = timeout
        self._ensure_database_exists()

    def _ensure_database_exists(self):
        """Create the schema if needed. Safe to call on an existing database."""
        with self._get_connection() as conn:
            conn.executescript(get_schema_sql())
            conn.execute(
                "INSERT OR REPLACE INTO model_metadata (key, value, updated_at) VALUES ('schema_version', ?, ?)",
                (SCHEMA_VERSION, utc_now().isoformat())
            )

    @contextmanager
    def _get_connection(self):
        """Get a database connection, committed on success and rolled back on error."""
        conn = sqlite3.connect(str(self.database_path), timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Reservation queries
    # ------------------------------------------------------------------

    def count_conflicting_reservations(
        self,
        resource_kind: ResourceKind,
        resource_id: int,
        window: TimeWindow,
        exclude_flight_id: Optional[int] = None,
    ) -> int:
        kind = ResourceKind(resource_kind)
        if kind == ResourceKind.AIRCRAFT:
            sql = """
                SELECT COUNT(*) FROM flights f
                WHERE f.aircraft_id = ?
                  AND f.departure_time < ?
                  AND f.arrival_time > ?
            """
        else:
            sql = """
                SELECT COUNT(*) FROM flights f
                JOIN flight_crew fc ON fc.flight_id = f.id
                WHERE fc.crew_id = ?
                  AND f.departure_time < ?
                  AND f.arrival_time > ?
            """
        params: List[Any] = [resource_id, to_storage(window.end), to_storage(window.start)]
        if exclude_flight_id is not None:
            sql += " AND f.id != ?"
            params.append(exclude_flight_id)

        with self._get_connection() as conn:
            count = conn.execute(sql, params).fetchone()[0]

        logger.debug(
            f"{kind.value} {resource_id} conflicts for {window} "
            f"(excluding flight {exclude_flight_id}): {count}"
        )
        return count

    # ------------------------------------------------------------------
    # Aircraft
    # ------------------------------------------------------------------

    def add_aircraft(self, aircraft: Aircraft) -> Aircraft:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "INSERT INTO aircraft (model, tail_number, seats_capacity, is_active) VALUES (?, ?, ?, ?)",
                (aircraft.model, aircraft.tail_number, aircraft.seats_capacity, int(aircraft.is_active))
            )
            aircraft.id = cursor.lastrowid
        logger.info(f"Aircraft created: {aircraft.id} {aircraft.tail_number}")
        return aircraft

    def get_aircraft(self, aircraft_id: int) -> Optional[Aircraft]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM aircraft WHERE id = ?", (aircraft_id,)).fetchone()
        return self._row_to_aircraft(row) if row else None

    def get_aircraft_by_tail_number(self, tail_number: str) -> Optional[Aircraft]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM aircraft WHERE tail_number = ?", (tail_number,)).fetchone()
        return self._row_to_aircraft(row) if row else None

    def list_aircraft(self, active_only: bool = False) -> List[Aircraft]:
        sql = "SELECT * FROM aircraft"
        if active_only:
            sql += " WHERE is_active = 1"
        sql += " ORDER BY id"
        with self._get_connection() as conn:
            rows = conn.execute(sql).fetchall()
        return [self._row_to_aircraft(row) for row in rows]

    def update_aircraft(self, aircraft: Aircraft) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE aircraft SET model = ?, tail_number = ?, seats_capacity = ?, is_active = ? WHERE id = ?",
                (aircraft.model, aircraft.tail_number, aircraft.seats_capacity, int(aircraft.is_active), aircraft.id)
            )
            return cursor.rowcount > 0

    def delete_aircraft(self, aircraft_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM aircraft WHERE id = ?", (aircraft_id,))
            return cursor.rowcount > 0

    def is_tail_number_unique(self, tail_number: str, exclude_aircraft_id: Optional[int] = None) -> bool:
        sql = "SELECT 1 FROM aircraft WHERE tail_number = ?"
        params: List[Any] = [tail_number]
        if exclude_aircraft_id is not None:
            sql += " AND id != ?"
            params.append(exclude_aircraft_id)
        with self._get_connection() as conn:
            return conn.execute(sql, params).fetchone() is None

    def has_flights_for_aircraft(self, aircraft_id: int) -> bool:
        with self._get_connection() as conn:
            row = conn.execute("SELECT 1 FROM flights WHERE aircraft_id = ? LIMIT 1", (aircraft_id,)).fetchone()
        return row is not None

    # ------------------------------------------------------------------
    # Airports
    # ------------------------------------------------------------------

    def add_airport(self, airport: Airport) -> Airport:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO airports (iata_code, icao_code, name, country_code, city, country, latitude, longitude)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (airport.iata_code, airport.icao_code, airport.name, airport.country_code,
                 airport.city, airport.country, airport.latitude, airport.longitude)
            )
            airport.id = cursor.lastrowid
        logger.info(f"Airport created: {airport.id} {airport.iata_code}")
        return airport

    def get_airport(self, airport_id: int) -> Optional[Airport]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM airports WHERE id = ?", (airport_id,)).fetchone()
        return self._row_to_airport(row) if row else None

    def get_airport_by_iata(self, iata_code: str) -> Optional[Airport]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM airports WHERE iata_code = ?", ((iata_code or "").upper(),)
            ).fetchone()
        return self._row_to_airport(row) if row else None

    def list_airports(self, city: Optional[str] = None, country: Optional[str] = None) -> List[Airport]:
        sql = "SELECT * FROM airports WHERE 1 = 1"
        params: List[Any] = []
        if city:
            sql += " AND city = ?"
            params.append(city)
        if country:
            sql += " AND country = ?"
            params.append(country)
        sql += " ORDER BY iata_code"
        with self._get_connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_airport(row) for row in rows]

    def update_airport(self, airport: Airport) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                UPDATE airports SET iata_code = ?, icao_code = ?, name = ?, country_code = ?,
                    city = ?, country = ?, latitude = ?, longitude = ?
                WHERE id = ?
                """,
                (airport.iata_code, airport.icao_code, airport.name, airport.country_code,
                 airport.city, airport.country, airport.latitude, airport.longitude, airport.id)
            )
            return cursor.rowcount > 0

    def delete_airport(self, airport_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM airports WHERE id = ?", (airport_id,))
            return cursor.rowcount > 0

    def is_iata_code_unique(self, iata_code: str, exclude_airport_id: Optional[int] = None) -> bool:
        sql = "SELECT 1 FROM airports WHERE iata_code = ?"
        params: List[Any] = [(iata_code or "").upper()]
        if exclude_airport_id is not None:
            sql += " AND id != ?"
            params.append(exclude_airport_id)
        with self._get_connection() as conn:
            return conn.execute(sql, params).fetchone() is None

    def has_flights_for_airport(self, airport_id: int) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM flights WHERE departure_airport_id = ? OR arrival_airport_id = ? LIMIT 1",
                (airport_id, airport_id)
            ).fetchone()
        return row is not None

    def get_airport_coordinates(self, iata_code: str) -> Optional[AirportCoordinate]:
        airport = self.get_airport_by_iata(iata_code)
        if airport is None:
            return None
        return airport.coordinate

    # ------------------------------------------------------------------
    # Crew
    # ------------------------------------------------------------------

    def add_crew_member(self, crew: CrewMember) -> CrewMember:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "INSERT INTO crew_members (first_name, last_name, role, license_number) VALUES (?, ?, ?, ?)",
                (crew.first_name, crew.last_name, crew.role, crew.license_number or None)
            )
            crew.id = cursor.lastrowid
        logger.info(f"Crew member created: {crew.id} {crew.full_name} ({crew.role})")
        return crew

    def get_crew_member(self, crew_id: int) -> Optional[CrewMember]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM crew_members WHERE id = ?", (crew_id,)).fetchone()
        return self._row_to_crew(row) if row else None

    def list_crew(self, role: Optional[str] = None) -> List[CrewMember]:
        sql = "SELECT * FROM crew_members"
        params: List[Any] = []
        if role:
            sql += " WHERE lower(role) = lower(?)"
            params.append(role)
        sql += " ORDER BY id"
        with self._get_connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_crew(row) for row in rows]

    def update_crew_member(self, crew: CrewMember) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE crew_members SET first_name = ?, last_name = ?, role = ?, license_number = ? WHERE id = ?",
                (crew.first_name, crew.last_name, crew.role, crew.license_number or None, crew.id)
            )
            return cursor.rowcount > 0

    def delete_crew_member(self, crew_id: int) -> bool:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM flight_crew WHERE crew_id = ?", (crew_id,))
            cursor = conn.execute("DELETE FROM crew_members WHERE id = ?", (crew_id,))
            return cursor.rowcount > 0

    def is_license_number_unique(self, license_number: str, exclude_crew_id: Optional[int] = None) -> bool:
        sql = "SELECT 1 FROM crew_members WHERE license_number = ?"
        params: List[Any] = [license_number]
        if exclude_crew_id is not None:
            sql += " AND id != ?"
            params.append(exclude_crew_id)
        with self._get_connection() as conn:
            return conn.execute(sql, params).fetchone() is None

    def has_flights_for_crew(self, crew_id: int) -> bool:
        with self._get_connection() as conn:
            row = conn.execute("SELECT 1 FROM flight_crew WHERE crew_id = ? LIMIT 1", (crew_id,)).fetchone()
        return row is not None

    def resolve_crew_members(self, crew_ids: Iterable[int]) -> List[CrewMember]:
        ids = list(crew_ids)
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM crew_members WHERE id IN ({placeholders})", ids
            ).fetchall()
        by_id = {row['id']: self._row_to_crew(row) for row in rows}
        return [by_id[crew_id] for crew_id in ids if crew_id in by_id]

    def get_available_crew(self, window: TimeWindow) -> List[CrewMember]:
        """Crew members with no flight overlapping ``window``."""
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM crew_members c
                WHERE c.id NOT IN (
                    SELECT fc.crew_id FROM flight_crew fc
                    JOIN flights f ON f.id = fc.flight_id
                    WHERE f.departure_time < ? AND f.arrival_time > ?
                )
                ORDER BY c.id
                """,
                (to_storage(window.end), to_storage(window.start))
            ).fetchall()
        return [self._row_to_crew(row) for row in rows]

    # ------------------------------------------------------------------
    # Flights
    # ------------------------------------------------------------------

    def add_flight(self, flight: Flight) -> Flight:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO flights (flight_number, departure_time, arrival_time, aircraft_id,
                    departure_airport_id, arrival_airport_id, status, status_description)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (flight.flight_number, to_storage(flight.departure_time), to_storage(flight.arrival_time),
                 flight.aircraft_id, flight.departure_airport_id, flight.arrival_airport_id,
                 flight.status or FlightStatus.PLANNED, flight.status_description)
            )
            flight.id = cursor.lastrowid
            self._replace_flight_crew(conn, flight.id, flight.crew_member_ids)
        logger.info(f"Flight created: {flight.id} {flight.flight_number} with {len(flight.crew_member_ids)} crew members")
        return flight

    def get_flight(self, flight_id: int) -> Optional[Flight]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM flights WHERE id = ?", (flight_id,)).fetchone()
            if row is None:
                return None
            crew = self._get_flight_crew_ids(conn, [flight_id])
        return self._row_to_flight(row, crew.get(flight_id, []))

    def list_flights(
        self,
        aircraft_id: Optional[int] = None,
        crew_id: Optional[int] = None,
        airport_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Flight]:
        """
        List flights, optionally filtered.

        The date range keeps flights that depart at or after ``start`` and
        arrive at or before ``end``.
        """
        sql = "SELECT * FROM flights f WHERE 1 = 1"
        params: List[Any] = []
        if aircraft_id is not None:
            sql += " AND f.aircraft_id = ?"
            params.append(aircraft_id)
        if crew_id is not None:
            sql += " AND f.id IN (SELECT flight_id FROM flight_crew WHERE crew_id = ?)"
            params.append(crew_id)
        if airport_id is not None:
            sql += " AND (f.departure_airport_id = ? OR f.arrival_airport_id = ?)"
            params.extend([airport_id, airport_id])
        if start is not None:
            sql += " AND f.departure_time >= ?"
            params.append(to_storage(start))
        if end is not None:
            sql += " AND f.arrival_time <= ?"
            params.append(to_storage(end))
        sql += " ORDER BY f.departure_time, f.id"

        with self._get_connection() as conn:
            rows = conn.execute(sql, params).fetchall()
            crew = self._get_flight_crew_ids(conn, [row['id'] for row in rows])
        return [self._row_to_flight(row, crew.get(row['id'], [])) for row in rows]

    def update_flight(self, flight: Flight) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                UPDATE flights SET flight_number = ?, departure_time = ?, arrival_time = ?, aircraft_id = ?,
                    departure_airport_id = ?, arrival_airport_id = ?, status = ?, status_description = ?
                WHERE id = ?
                """,
                (flight.flight_number, to_storage(flight.departure_time), to_storage(flight.arrival_time),
                 flight.aircraft_id, flight.departure_airport_id, flight.arrival_airport_id,
                 flight.status, flight.status_description, flight.id)
            )
            if cursor.rowcount == 0:
                return False
            self._replace_flight_crew(conn, flight.id, flight.crew_member_ids)
        logger.info(f"Flight updated: {flight.id} {flight.flight_number} with {len(flight.crew_member_ids)} crew members")
        return True

    def update_flight_status(self, flight_id: int, status: str, status_description: Optional[str] = None) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE flights SET status = ?, status_description = ? WHERE id = ?",
                (status, status_description, flight_id)
            )
            return cursor.rowcount > 0

    def set_flight_crew(self, flight_id: int, crew_ids: List[int]) -> bool:
        with self._get_connection() as conn:
            if conn.execute("SELECT 1 FROM flights WHERE id = ?", (flight_id,)).fetchone() is None:
                return False
            self._replace_flight_crew(conn, flight_id, crew_ids)
        return True

    def delete_flight(self, flight_id: int) -> bool:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM flight_crew WHERE flight_id = ?", (flight_id,))
            cursor = conn.execute("DELETE FROM flights WHERE id = ?", (flight_id,))
            return cursor.rowcount > 0

    def get_database_info(self) -> Dict[str, Any]:
        """Get row counts and schema metadata."""
        with self._get_connection() as conn:
            info = {'database_path': str(self.database_path)}
            for table in ('aircraft', 'airports', 'crew_members', 'flights'):
                info[f'{table}_count'] = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            row = conn.execute("SELECT value FROM model_metadata WHERE key = 'schema_version'").fetchone()
            info['schema_version'] = row['value'] if row else None
        return info

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _replace_flight_crew(self, conn: sqlite3.Connection, flight_id: int, crew_ids: Iterable[int]) -> None:
        conn.execute("DELETE FROM flight_crew WHERE flight_id = ?", (flight_id,))
        existing = set()
        position = 0
        for crew_id in crew_ids:
            if crew_id in existing:
                continue
            # Unknown crew ids are skipped, the same way the roster rule ignores them
            if conn.execute("SELECT 1 FROM crew_members WHERE id = ?", (crew_id,)).fetchone() is None:
                continue
            conn.execute(
                "INSERT INTO flight_crew (flight_id, crew_id, position) VALUES (?, ?, ?)",
                (flight_id, crew_id, position)
            )
            existing.add(crew_id)
            position += 1

    def _get_flight_crew_ids(self, conn: sqlite3.Connection, flight_ids: List[int]) -> Dict[int, List[int]]:
        if not flight_ids:
            return {}
        placeholders = ", ".join("?" for _ in flight_ids)
        rows = conn.execute(
            f"SELECT flight_id, crew_id FROM flight_crew WHERE flight_id IN ({placeholders}) ORDER BY flight_id, position",
            flight_ids
        ).fetchall()
        crew: Dict[int, List[int]] = {}
        for row in rows:
            crew.setdefault(row['flight_id'], []).append(row['crew_id'])
        return crew

    def _row_to_aircraft(self, row: sqlite3.Row) -> Aircraft:
        return Aircraft(
            id=row['id'],
            model=row['model'],
            tail_number=row['tail_number'],
            seats_capacity=row['seats_capacity'],
            is_active=bool(row['is_active']),
        )

    def _row_to_airport(self, row: sqlite3.Row) -> Airport:
        return Airport(
            id=row['id'],
            iata_code=row['iata_code'],
            icao_code=row['icao_code'],
            name=row['name'],
            country_code=row['country_code'],
            city=row['city'],
            country=row['country'],
            latitude=row['latitude'],
            longitude=row['longitude'],
        )

    def _row_to_crew(self, row: sqlite3.Row) -> CrewMember:
        return CrewMember(
            id=row['id'],
            first_name=row['first_name'],
            last_name=row['last_name'],
            role=row['role'],
            license_number=row['license_number'],
        )

    def _row_to_flight(self, row: sqlite3.Row, crew_ids: List[int]) -> Flight:
        return Flight(
            id=row['id'],
            flight_number=row['flight_number'],
            departure_time=parse_timestamp(row['departure_time']),
            arrival_time=parse_timestamp(row['arrival_time']),
            aircraft_id=row['aircraft_id'],
            departure_airport_id=row['departure_airport_id'],
            arrival_airport_id=row['arrival_airport_id'],
            crew_member_ids=list(crew_ids),
            status=row['status'],
            status_description=row['status_description'],
        )
