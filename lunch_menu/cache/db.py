import json
import logging
import os
import sqlite3
import threading
from typing import Any, Dict, Optional

from lunch_menu.core.config import settings
from lunch_menu.core.errors import (
    CacheCloseFailedError,
    CacheInitFailedError,
    CacheInvalidateFailedError,
    CacheNotInitializedError,
    CacheReadFailedError,
    CacheWriteFailedError,
)
from lunch_menu.fetch.utils import now_local_iso, today_local_str

logger = logging.getLogger(__name__)


class MenuCache:
    """
    SQLite cache of resolved menus keyed by (url, date).

    An entry is only ever valid for its exact calendar date. Entries older than
    today are swept on init and by the midnight job; unreadable entries are
    deleted on read.
    """

    def __init__(self):
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self.database_path: Optional[str] = None

    @property
    def initialized(self) -> bool:
        return self._conn is not None

    def _db(self) -> sqlite3.Connection:
        if self._conn is None:
            raise CacheNotInitializedError()
        return self._conn

    def init(self, db_path: str = None):
        """Open the database, create the cache table and purge stale entries"""
        path = db_path or settings.DATABASE_PATH
        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(path, check_same_thread=False)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS menu_cache (
                    url TEXT NOT NULL,
                    date TEXT NOT NULL,
                    data TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    UNIQUE(url, date)
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_menu_cache_url_date ON menu_cache(url, date)")
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise CacheInitFailedError(reason=str(e), db=path)

        self._conn = conn
        self.database_path = path
        logger.info(f"Cache initialized db={path}")

        self.invalidate_old_records()

    def get_cached_menu(self, url: str, date_str: str) -> Optional[Dict[str, Any]]:
        """Menu cached for exactly this URL and date, or None"""
        conn = self._db()
        try:
            with self._lock:
                row = conn.execute(
                    "SELECT data FROM menu_cache WHERE url = ? AND date = ?",
                    (url, date_str),
                ).fetchone()
        except sqlite3.Error as e:
            raise CacheReadFailedError(reason=str(e), url=url, date=date_str)

        if row is None:
            logger.info(f"Cache miss url={url} date={date_str}")
            return None

        try:
            data = json.loads(row[0])
        except (TypeError, ValueError):
            data = None

        if not isinstance(data, dict):
            logger.warning(f"Corrupted cache entry removed url={url} date={date_str}")
            self.delete_cached_menu(url, date_str)
            return None

        logger.info(f"Cache hit url={url} date={date_str}")
        return data

    def save_menu_to_cache(self, url: str, date_str: str, data: Dict[str, Any]):
        """Insert or replace the entry for (url, date)"""
        conn = self._db()
        try:
            payload = json.dumps(data, ensure_ascii=False)
            with self._lock:
                conn.execute(
                    "INSERT OR REPLACE INTO menu_cache (url, date, data, created_at) VALUES (?, ?, ?, ?)",
                    (url, date_str, payload, now_local_iso()),
                )
                conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise CacheWriteFailedError(reason=str(e), url=url, date=date_str)

        logger.info(f"Saved to cache url={url} date={date_str}")

    def invalidate_old_records(self) -> int:
        """Remove entries whose date is before today"""
        conn = self._db()
        today = today_local_str()
        try:
            with self._lock:
                cursor = conn.execute("DELETE FROM menu_cache WHERE date < ?", (today,))
                conn.commit()
        except sqlite3.Error as e:
            raise CacheInvalidateFailedError(reason=str(e))

        logger.info(f"Invalidated old records count={cursor.rowcount} today={today}")
        return cursor.rowcount

    def clear_all(self):
        """Clear all cache entries"""
        conn = self._db()
        try:
            with self._lock:
                conn.execute("DELETE FROM menu_cache")
                conn.commit()
        except sqlite3.Error as e:
            raise CacheWriteFailedError(reason=str(e))

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        conn = self._db()
        today = today_local_str()
        try:
            with self._lock:
                total_entries = conn.execute("SELECT COUNT(*) FROM menu_cache").fetchone()[0]
                today_entries = conn.execute(
                    "SELECT COUNT(*) FROM menu_cache WHERE date = ?", (today,)
                ).fetchone()[0]
        except sqlite3.Error as e:
            raise CacheReadFailedError(reason=str(e))

        return {
            "total_entries": total_entries,
            "today_entries": today_entries,
            "database_path": self.database_path,
        }

    def close(self):
        if self._conn is None:
            return
        try:
            with self._lock:
                self._conn.close()
        except sqlite3.Error as e:
            raise CacheCloseFailedError(reason=str(e))
        finally:
            self._conn = None
        logger.info("Cache database closed")

    def delete_cached_menu(self, url: str, date_str: str):
        """Remove the entry for (url, date) if present"""
        conn = self._db()
        try:
            with self._lock:
                conn.execute("DELETE FROM menu_cache WHERE url = ? AND date = ?", (url, date_str))
                conn.commit()
        except sqlite3.Error as e:
            raise CacheWriteFailedError(reason=str(e), url=url, date=date_str)


menu_cache = MenuCache()
