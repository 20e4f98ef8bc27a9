"""JSON-file adapter – JsonFileExpiringStore.

The whole store is one JSON document::

    {"<key>": {"value": <json>, "expires_at": "<ISO-8601>"}, ...}

Writes go to a sibling temp file which then replaces the document, so a
reader never sees a half-written file.
"""
from __future__ import annotations

import asyncio
import json
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Sequence

from quota_guard.application.store import ExpiringStore, as_count
from quota_guard.kernel.errors import StoreError
from quota_guard.kernel.locks import LoopBoundLock
from quota_guard.kernel.time import Clock, SystemClock, as_utc
from quota_guard.observability.logging import get_logger

_BACKEND = "jsonfile"

logger = get_logger(__name__)


class JsonFileExpiringStore(ExpiringStore[Any]):
    """Single-document on-disk store for single-host deployments."""

    def __init__(self, path: str | os.PathLike[str], clock: Clock | None = None) -> None:
        self._path = Path(path)
        self._clock: Clock = clock or SystemClock()
        self._lock = LoopBoundLock()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> Any:
        document = await asyncio.to_thread(self._read)
        raw = document.get(key)
        if raw is None:
            return None
        value, expires_at = self._entry(key, raw)
        if as_utc(self._clock.now()) >= expires_at:
            return None
        return value

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        expires_at = as_utc(self._clock.now()) + timedelta(seconds=ttl_seconds)
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            document[key] = {"value": value, "expires_at": expires_at.isoformat()}
            await asyncio.to_thread(self._write, document)

    async def sweep(self) -> int:
        """Remove expired entries, and malformed ones that can never be read back."""
        now = as_utc(self._clock.now())
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            live: dict[str, Any] = {}
            for key, raw in document.items():
                try:
                    _, expires_at = self._entry(key, raw)
                except StoreError:
                    logger.warning("store_entry_dropped", key=key, backend=_BACKEND, path=str(self._path))
                    continue
                if now < expires_at:
                    live[key] = raw
            removed = len(document) - len(live)
            if removed:
                await asyncio.to_thread(self._write, live)
        return removed

    async def consume(self, keys: Sequence[str], limit: int, ttl_seconds: float) -> tuple[bool, int]:
        """Check and increment the counters under *keys* in one read and one write."""
        now = as_utc(self._clock.now())
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            used = 0
            for key in keys:
                raw = document.get(key)
                if raw is None:
                    continue
                try:
                    value, expires_at = self._entry(key, raw)
                except StoreError:
                    continue
                if now < expires_at:
                    used = max(used, as_count(value))
            if used >= limit:
                return False, used
            expires = (now + timedelta(seconds=ttl_seconds)).isoformat()
            for key in keys:
                document[key] = {"value": used + 1, "expires_at": expires}
            await asyncio.to_thread(self._write, document)
        return True, used + 1

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _entry(key: str, raw: Any) -> tuple[Any, datetime]:
        try:
            return raw["value"], as_utc(datetime.fromisoformat(raw["expires_at"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError("Malformed store entry", backend=_BACKEND, key=key, cause=exc) from exc

    def _read(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StoreError(f"Could not read {self._path}", backend=_BACKEND, cause=exc) from exc
        if not raw.strip():
            return {}
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Malformed store document {self._path}", backend=_BACKEND, cause=exc) from exc
        if not isinstance(document, dict):
            raise StoreError(f"Store document {self._path} is not an object", backend=_BACKEND)
        return document

    def _write(self, document: dict[str, Any]) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(document, fh, separators=(",", ":"))
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"Could not write {self._path}", backend=_BACKEND, cause=exc) from exc


__all__ = ["JsonFileExpiringStore"]
