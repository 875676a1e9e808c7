"""Core Layer - pure domain logic, no filesystem access.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure and deterministic (clock values are passed in)
"""
