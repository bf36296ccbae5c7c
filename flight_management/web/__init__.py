"""FastAPI server for the flight operations service."""
