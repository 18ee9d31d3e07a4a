# core/storage.py
import os
import json
import sqlite3
import datetime
import time
from typing import Any, Callable, Dict, Optional

import pytz

from .models import CacheEntry
from .logger import get_logger

logger = get_logger(__name__)

DB_PATH = os.getenv("CACHE_DB_PATH", "/data/inventory_cache.sqlite3")


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


class SqliteCache:
    """
    Result cache in a SQLite file, so several worker processes on one host
    see each other's entries. Expired rows are ignored on read, not deleted.
    """

    def __init__(
        self,
        ttl: float,
        db_path: str = DB_PATH,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl = ttl
        self.db_path = db_path
        self.clock = clock
        self.ensure_db()

    def _connect(self):
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return sqlite3.connect(self.db_path, timeout=10)

    def ensure_db(self):
        with self._connect() as con:
            cur = con.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS inventory_cache (
                    identity TEXT PRIMARY KEY,
                    ts REAL,
                    payload TEXT,
                    updated_at TEXT
                )
            """
            )
            con.commit()

    def get(self, identity: str) -> Optional[CacheEntry]:
        with self._connect() as con:
            cur = con.cursor()
            cur.execute(
                "SELECT ts, payload FROM inventory_cache WHERE identity=?",
                (identity,),
            )
            row = cur.fetchone()

        if row is None:
            return None
        ts, payload_json = row
        if self.clock() - ts >= self.ttl:
            logger.debug("Cache entry for %s is stale (%.1fs old).", identity, self.clock() - ts)
            return None
        try:
            payload = json.loads(payload_json)
        except ValueError as e:
            logger.warning("Discarding unreadable cache row for %s: %s", identity, e)
            return None
        return CacheEntry(identity=identity, timestamp=ts, payload=payload)

    def put(self, identity: str, payload: Dict[str, Any]) -> CacheEntry:
        entry = CacheEntry(identity=identity, timestamp=self.clock(), payload=payload)
        with self._connect() as con:
            cur = con.cursor()
            cur.execute(
                """
                INSERT INTO inventory_cache (identity, ts, payload, updated_at)
                VALUES (?,?,?,?)
                ON CONFLICT(identity) DO UPDATE SET
                    ts=excluded.ts,
                    payload=excluded.payload,
                    updated_at=excluded.updated_at
            """,
                (identity, entry.timestamp, json.dumps(payload), now_utc_iso()),
            )
            con.commit()
        return entry
