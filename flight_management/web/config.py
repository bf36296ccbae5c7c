#!/usr/bin/env python3

"""
Server configuration for the flight operations API, read from the environment.
"""

import os
from typing import Dict, List, Optional

# Environment Configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# CORS Configuration
DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def _split_list(value: Optional[str], default: List[str]) -> List[str]:
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


ALLOWED_ORIGINS = _split_list(os.getenv("ALLOWED_ORIGINS"), DEFAULT_ALLOWED_ORIGINS)

# Database
DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))


def get_safe_db_path() -> str:
    """Get the database path, pinned to the service directory in production."""
    db_path = os.getenv("FLIGHTS_DB", "flights.db")

    if ENVIRONMENT == "production":
        allowed_dir = "/var/lib/flight-management"
        if not db_path.startswith(allowed_dir):
            db_path = f"{allowed_dir}/flights.db"

    return db_path


# Forecast lookup tables, packaged defaults when unset
AIRCRAFT_SPEEDS_FILE = os.getenv("AIRCRAFT_SPEEDS_FILE") or None
TAXI_TIMES_FILE = os.getenv("TAXI_TIMES_FILE") or None

# Upper bound on a single flight validation, unset means no limit
VALIDATION_DEADLINE_SECONDS = _optional_float(os.getenv("VALIDATION_DEADLINE_SECONDS"))

# Security Headers
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS", "true").lower() == "true"
SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
} if SECURITY_HEADERS_ENABLED else {}

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
