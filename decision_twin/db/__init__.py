"""Database Infrastructure — SQLAlchemy Base and standalone session factory.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite for local/test use, asyncpg for PostgreSQL
"""
