"""Record IO — typed JSON reads/writes over a KeyValueStore.

Invariants:
    - Malformed JSON or a failed validation is never raised: single reads
      return None, list reads skip the bad element (or return [] when the
      whole value is unreadable); both log a warning with the store key
    - Writes serialize with camelCase keys and omit unset optionals
    - StoreError from the backend propagates unchanged

Design Decisions:
    - Shared by every service so DecisionRepository and ReminderEngine can
      both read decisions without importing each other
"""

import json
import logging
from typing import TypeVar

from pydantic import ValidationError

from decision_twin.core.decision_stats import sort_newest_first
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.schemas.base import CamelModel
from decision_twin.schemas.decision import Decision

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CamelModel)

DECISION_PREFIX = "decision:"


def decision_key(decision_id: str) -> str:
    return f"{DECISION_PREFIX}{decision_id}"


def parse_model(raw: str | None, model: type[M], key: str) -> M | None:
    if raw is None:
        return None
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            f"Skipping malformed record: {e.error_count()} error(s)",
            extra={"store_key": key},
        )
        return None


async def read_model(store: KeyValueStore, key: str, model: type[M]) -> M | None:
    return parse_model(await store.get(key), model, key)


async def read_model_list(
    store: KeyValueStore, key: str, model: type[M],
) -> list[M]:
    raw = await store.get(key)
    if raw is None:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Unreadable list value", extra={"store_key": key})
        return []
    if not isinstance(items, list):
        logger.warning("Stored value is not a list", extra={"store_key": key})
        return []
    records = []
    for item in items:
        try:
            records.append(model.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed list element", extra={"store_key": key})
    return records


async def write_model(store: KeyValueStore, key: str, record: CamelModel) -> None:
    await store.set(key, record.to_json())


async def write_model_list(
    store: KeyValueStore, key: str, records: list[CamelModel],
) -> None:
    payload = [r.to_dict() for r in records]
    await store.set(key, json.dumps(payload, ensure_ascii=False))


async def list_decisions(store: KeyValueStore) -> list[Decision]:
    """Every readable decision, newest first."""
    decisions = []
    for item in await store.list(DECISION_PREFIX):
        decision = parse_model(item.value, Decision, item.key)
        if decision is not None:
            decisions.append(decision)
    return sort_newest_first(decisions)
