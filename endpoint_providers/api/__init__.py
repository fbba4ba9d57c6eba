"""API Layer — exception middleware, error handlers, and demo endpoint providers.

Invariants:
    - Exception middleware is registered last (outermost user middleware)
    - Route modules are endpoint providers, discovered by the scanner

Design Decisions:
    - Routes under api/routes/ are never imported by main.py directly;
      the routes package is passed as a scan marker instead
"""
