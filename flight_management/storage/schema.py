"""
Database schema for the flight operations store.

The schema is created idempotently. Timestamps are stored as fixed width
UTC ISO-8601 text (see ``utils.timeutils.to_storage``) so the overlap test
can be evaluated directly in SQL.
"""

# Schema version for tracking migrations
SCHEMA_VERSION = "1.0.0"

CREATE_METADATA_TABLE = """
CREATE TABLE IF NOT EXISTS model_metadata (
    key TEXT PRIMARY KEY,
    value TEXT,
    updated_at TEXT
);
"""

CREATE_AIRCRAFT_TABLE = """
CREATE TABLE IF NOT EXISTS aircraft (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    model TEXT NOT NULL,
    tail_number TEXT NOT NULL UNIQUE,
    seats_capacity INTEGER NOT NULL,
    is_active INTEGER NOT NULL DEFAULT 1  -- SQLite uses INTEGER for BOOLEAN
);
"""

CREATE_AIRPORTS_TABLE = """
CREATE TABLE IF NOT EXISTS airports (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    iata_code TEXT NOT NULL UNIQUE,
    icao_code TEXT,
    name TEXT NOT NULL,
    country_code TEXT,
    city TEXT,
    country TEXT,
    latitude REAL,
    longitude REAL
);
"""

CREATE_CREW_MEMBERS_TABLE = """
CREATE TABLE IF NOT EXISTS crew_members (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    role TEXT NOT NULL,
    license_number TEXT
);
"""

CREATE_FLIGHTS_TABLE = """
CREATE TABLE IF NOT EXISTS flights (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    flight_number TEXT NOT NULL,
    departure_time TEXT NOT NULL,
    arrival_time TEXT NOT NULL,
    aircraft_id INTEGER NOT NULL,
    departure_airport_id INTEGER NOT NULL,
    arrival_airport_id INTEGER NOT NULL,
    status TEXT NOT NULL DEFAULT 'Planned',
    status_description TEXT,
    FOREIGN KEY (aircraft_id) REFERENCES aircraft (id),
    FOREIGN KEY (departure_airport_id) REFERENCES airports (id),
    FOREIGN KEY (arrival_airport_id) REFERENCES airports (id)
);
"""

CREATE_FLIGHT_CREW_TABLE = """
CREATE TABLE IF NOT EXISTS flight_crew (
    flight_id INTEGER NOT NULL,
    crew_id INTEGER NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (flight_id, crew_id),
    FOREIGN KEY (flight_id) REFERENCES flights (id) ON DELETE CASCADE,
    FOREIGN KEY (crew_id) REFERENCES crew_members (id)
);
"""

CREATE_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_flights_aircraft_window
    ON flights (aircraft_id, departure_time, arrival_time);
CREATE INDEX IF NOT EXISTS idx_flights_departure_time ON flights (departure_time);
CREATE INDEX IF NOT EXISTS idx_flight_crew_crew ON flight_crew (crew_id);
CREATE UNIQUE INDEX IF NOT EXISTS idx_crew_license
    ON crew_members (license_number) WHERE license_number IS NOT NULL;
"""


def get_schema_sql() -> str:
    """Get the complete schema SQL."""
    return "\n".join([
        CREATE_METADATA_TABLE,
        CREATE_AIRCRAFT_TABLE,
        CREATE_AIRPORTS_TABLE,
        CREATE_CREW_MEMBERS_TABLE,
        CREATE_FLIGHTS_TABLE,
        CREATE_FLIGHT_CREW_TABLE,
        CREATE_INDEXES,
    ])
