"""Route Providers — one endpoint provider per resource/concern.

Invariants:
    - Each module exports exactly one EndpointProvider class
    - Providers add disjoint routes (registration order is not guaranteed)
"""
