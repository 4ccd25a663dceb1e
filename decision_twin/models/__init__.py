"""ORM Models — SQLAlchemy declarative models backing the key-value store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Imported here so Base.metadata is complete before create_all/alembic runs
"""

from decision_twin.models.kv_entry import KeyValueEntry  # noqa: F401
