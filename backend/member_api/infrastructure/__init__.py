"""Infrastructure Layer: database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver errors are translated to core/errors before leaving this layer
"""
