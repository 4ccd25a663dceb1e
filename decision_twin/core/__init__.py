"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Time enters as a `now` argument; functions are deterministic given inputs

Design Decisions:
    - Functional core separated from the imperative shell (services/, infrastructure/)
"""
