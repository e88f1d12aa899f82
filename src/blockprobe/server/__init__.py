"""Server module - Probe logic and the FastAPI application."""
