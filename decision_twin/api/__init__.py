"""API Layer — FastAPI routes, dependency providers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON (exports return text documents)

Design Decisions:
    - Thin routes delegate to services; None from a service becomes a 404 here
"""
