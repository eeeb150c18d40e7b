"""Shared plumbing for the draft and listing stores.

* :class:`WriteQueue` serializes storage writes per store.
* :func:`storage_get` / :func:`storage_set` / :func:`storage_remove` turn
  adapter failures into :class:`PersistenceError`.
* :class:`Listeners` fans state changes out to subscribers.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from autoconnex.exceptions import PersistenceError
from autoconnex.storage.base import StorageAdapter

_logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")


class WriteQueue:
    """Single in-flight write per store.

    Callers hold the queue while they compute the next state from the latest
    committed one, write it, and commit it.  :class:`asyncio.Lock` wakes
    waiters in FIFO order, so writes land in the order they were issued and a
    slow earlier write can never overwrite a later one.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._lock = asyncio.Lock()
        self._pending = 0

    @property
    def pending(self) -> int:
        """Operations holding or waiting for the queue."""
        return self._pending

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        self._pending += 1
        try:
            async with self._lock:
                _logger.debug("%s write slot acquired (%d pending)", self._name, self._pending - 1)
                yield
        finally:
            self._pending -= 1


async def _guarded(operation: str, key: str, call: Callable[[], Awaitable[T]]) -> T:
    try:
        return await call()
    except PersistenceError:
        raise
    except Exception as exc:
        raise PersistenceError(
            f"Storage {operation} failed for {key!r}: {exc}",
            key=key,
            operation=operation,
        ) from exc


async def storage_get(storage: StorageAdapter, key: str) -> str | None:
    return await _guarded("get", key, lambda: storage.get(key))


async def storage_set(storage: StorageAdapter, key: str, value: str) -> None:
    await _guarded("set", key, lambda: storage.set(key, value))


async def storage_remove(storage: StorageAdapter, key: str) -> None:
    await _guarded("remove", key, lambda: storage.remove(key))


def encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def decode_json(key: str, text: str, parse: Callable[[Any], T]) -> T:
    """Parse a stored blob, raising :class:`PersistenceError` on bad data."""
    try:
        return parse(json.loads(text))
    except (ValueError, TypeError) as exc:
        # pydantic.ValidationError is a ValueError.
        raise PersistenceError(
            f"Stored value under {key!r} is not readable: {exc}",
            key=key,
            operation="decode",
        ) from exc


class Listeners(Generic[S]):
    """Subscriber registry for store state changes."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._callbacks: list[Callable[[S], None]] = []

    def subscribe(self, callback: Callable[[S], None]) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it."""
        self._callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    def notify(self, state: S) -> None:
        for callback in list(self._callbacks):
            try:
                callback(state)
            except Exception:
                _logger.warning("%s listener %r failed", self._name, callback, exc_info=True)
