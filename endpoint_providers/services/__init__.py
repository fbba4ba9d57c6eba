"""Services Layer — provider factory, discovery scanner, registry, DI helpers.

Invariants:
    - Discovery runs once at startup, synchronously, on the startup thread
    - Provider construction always goes through EndpointProviderFactory

Design Decisions:
    - Scanner and registry share the factory: reflection and explicit
      registration build providers identically
"""
