"""Dict-backed storage adapter."""

from __future__ import annotations

from collections.abc import Mapping


class InMemoryStorage:
    """Ephemeral storage adapter.

    Useful for tests and for sessions that should not outlive the process.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of everything currently stored."""
        return dict(self._data)
