"""Infrastructure Layer — store backends, external clients and logging.

Invariants:
    - Backend failures are mapped onto core/errors.py types before leaving this layer
    - External calls wrapped with retry/timeout/error mapping
"""
