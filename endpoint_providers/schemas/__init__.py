"""Pydantic Schemas — wire contracts for API responses.

Invariants:
    - Schemas serialize camelCase on the wire, snake_case in Python
    - Schemas carry no behavior beyond computed fields
"""
