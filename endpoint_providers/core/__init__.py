"""Core Layer — capability contract, service container, error hierarchy.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - No IO: everything here is in-memory object construction

Design Decisions:
    - Service container lives in core/ because providers are typed against it
      (ADR: dependency arrows point inward only)
"""
