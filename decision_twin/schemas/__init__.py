"""Pydantic Schemas — persisted entities and request/response contracts.

Invariants:
    - Every persisted entity is validated when read back from the store
    - Persisted JSON uses camelCase keys (decision:<id>, reminders, ...)
    - Domain types from core/ used for enum fields

Design Decisions:
    - One schema module per entity family; entities and their input
      schemas live side by side
"""
