"""JSON file storage adapter.

All keys live in one JSON object on disk.  Every write rewrites the file
through a temporary sibling and :func:`os.replace`, so a crash mid-write
leaves either the old or the new document, never a torn one.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

_logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Storage adapter persisting to a single JSON document.

    Blocking file I/O runs in a worker thread via :func:`asyncio.to_thread`.
    Read-modify-write cycles are serialized with an :class:`asyncio.Lock`.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not text.strip():
            return {}
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, separators=(",", ":"))
            os.replace(tmp_name, self._path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise

    async def get(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)
        _logger.debug("Wrote %d bytes under %s to %s", len(value), key, self._path)

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if key not in data:
                return
            del data[key]
            await asyncio.to_thread(self._write_all, data)
        _logger.debug("Removed %s from %s", key, self._path)
