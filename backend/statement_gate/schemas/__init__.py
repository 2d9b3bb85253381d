"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe the system boundary; core/ never imports them
    - Domain enums from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
