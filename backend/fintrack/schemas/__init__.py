"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Money leaves the API as float; it is stored as Decimal

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
