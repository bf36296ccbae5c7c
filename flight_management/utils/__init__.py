"""Utility helpers for the flight_management package."""

from .timeutils import ensure_utc, parse_timestamp, to_storage, utc_now

__all__ = ['ensure_utc', 'parse_timestamp', 'to_storage', 'utc_now']
