"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (format, required fields)
    - Relationship rules are NOT enforced here; they live in the engines

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
