from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistent string store keyed by name (the app's "local storage").

    Every collection is written whole on each change; there is no append path
    and no cross-process locking, so the last writer wins.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore(KeyValueStore):
    """All keys kept in a single JSON object on disk."""

    def __init__(self, path: Path | str):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self._path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class MySQLKeyValueStore(KeyValueStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT storage_value FROM app_storage WHERE storage_key=%s",
                (key,),
            )
            r = fetchone(cur)
            return r["storage_value"] if r else None

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_storage(storage_key, storage_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE storage_value=VALUES(storage_value)
                """,
                (key, value),
            )

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM app_storage WHERE storage_key=%s", (key,))

    def keys(self) -> list[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT storage_key FROM app_storage ORDER BY storage_key")
            return [r["storage_key"] for r in fetchall(cur)]


def load_json_list(store: KeyValueStore, key: str) -> Optional[list[Any]]:
    """Decode a stored collection; ``None`` means the key is absent or blank."""

    raw = store.get(key)
    if raw is None or not raw.strip():
        return None
    data = json.loads(raw)
    if not isinstance(data, list):
        logger.warning("Storage key %s does not hold a list; treating as empty", key)
        return []
    return data


def save_json_list(store: KeyValueStore, key: str, items: list[Any]) -> None:
    store.set(key, json.dumps(items, ensure_ascii=False))
