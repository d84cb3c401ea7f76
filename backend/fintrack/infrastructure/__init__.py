"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage errors leave this layer as StorageFailure (core/errors.py)
"""
