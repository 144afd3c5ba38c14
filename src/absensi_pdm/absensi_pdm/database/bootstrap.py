from __future__ import annotations

import logging
from pathlib import Path

import mysql.connector

from ..core.constants import STORAGE_KEY_ATTENDANCE, STORAGE_KEY_PARTICIPANTS, STORAGE_KEY_PERIODS
from .connection import DBConfig, DatabaseConnection
from .kv_store import JsonFileStore, KeyValueStore, MemoryStore, MySQLKeyValueStore

logger = logging.getLogger(__name__)

STORAGE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS app_storage (
    storage_key VARCHAR(64) NOT NULL PRIMARY KEY,
    storage_value LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def ensure_storage_table(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(STORAGE_TABLE_SQL)
        conn.commit()
    finally:
        conn.close()


def build_store(settings) -> KeyValueStore:
    """Pick the key-value backend named by ``STORAGE_BACKEND`` in the settings module."""

    backend = str(getattr(settings, "STORAGE_BACKEND", "json")).lower()

    if backend == "memory":
        return MemoryStore()

    if backend == "json":
        path = Path(getattr(settings, "STORAGE_PATH", "instance/storage.json"))
        logger.info("Using JSON file storage at %s", path)
        return JsonFileStore(path)

    if backend == "mysql":
        db_config = getattr(settings, "DB_CONFIG")
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_storage_table(db_config)
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        logger.info("Using MySQL storage %s@%s/%s", conn.config.user, conn.config.host, conn.config.database)
        return MySQLKeyValueStore(conn)

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def clear_all(store: KeyValueStore) -> None:
    """Drop all three collections; the next read re-seeds the sample participants."""

    for key in (STORAGE_KEY_PARTICIPANTS, STORAGE_KEY_ATTENDANCE, STORAGE_KEY_PERIODS):
        store.remove(key)
    logger.warning("All participant, attendance and period data cleared")
