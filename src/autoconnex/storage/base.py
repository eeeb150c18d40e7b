"""Key-value storage adapter interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageAdapter(Protocol):
    """Structural interface for the async key-value blob store.

    The stores only rely on single-key atomicity.  Implementations may raise
    any exception on failure; the stores wrap it in
    :class:`autoconnex.exceptions.PersistenceError`.
    """

    async def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def remove(self, key: str) -> None:
        """Remove *key*.  Removing an absent key is not an error."""
        ...
