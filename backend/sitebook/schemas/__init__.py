"""Schemas — Pydantic models validating input at the API and service boundary."""
