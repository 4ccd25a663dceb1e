"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All persistence goes through KeyValueStore; values are JSON text,
      the store itself enforces no schema
    - list(prefix) returns entries in the store's iteration order

Design Decisions:
    - Protocol over ABC: any object with these coroutines can be injected
      as the host store (structural subtyping)
    - Async in Protocol: implementations do IO; the pure rules in core/
      never await, services orchestrate the awaits around them
"""

from typing import NamedTuple, Protocol


class StoreItem(NamedTuple):
    """One key/value pair returned by KeyValueStore.list()."""
    key: str
    value: str


class KeyValueStore(Protocol):
    """Contract for the key-value store — implemented by shell."""
    async def set(self, key: str, value: str) -> None: ...
    async def get(self, key: str) -> str | None: ...
    async def remove(self, key: str) -> None: ...
    async def keys(self) -> list[str]: ...
    async def list(self, prefix: str) -> list[StoreItem]: ...


class AdviceGateway(Protocol):
    """Contract for the remote advice function: invoke(type, payload) -> text."""
    async def invoke(self, prompt_type: str, payload: dict) -> str: ...
