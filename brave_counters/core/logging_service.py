"""
Activity logging for BRAVE Counters.
Operational events (refresh cycles, provider failures, registry changes) are kept
in a small SQLite table so the admin page can show what happened recently.
"""

import json
import logging
import os
import sqlite3
from datetime import datetime, timedelta

from .config import Config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s : %(levelname)s : %(module)s : %(funcName)s: %(message)s"


def configure_logging(level=None):
    """Set up stdlib logging for the process"""
    level_name = (level or Config.LOG_LEVEL or 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%d-%b-%y %H:%M:%S",
    )


class LoggingService:
    """Activity log stored in the app_logs table of LOG_DB"""

    db_path = None

    @classmethod
    def init_app(cls, app):
        cls.db_path = app.config.get('LOG_DB', Config.LOG_DB)
        if cls.db_path:
            cls._ensure_logs_table()

    @classmethod
    def _ensure_logs_table(cls):
        """Ensure the app_logs table exists"""
        db_dir = os.path.dirname(cls.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        with sqlite3.connect(cls.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS app_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_source
                ON app_logs(source)
            """)
            conn.commit()

    @classmethod
    def log(cls, level, source, message, details=None):
        """
        Record an event in the activity log and the process log

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (refresh, groups, widgets, ...)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
        """
        level = level.upper()
        logger.log(getattr(logging, level, logging.INFO), f"[{source}] {message}")

        if not cls.db_path:
            return

        if isinstance(details, dict):
            details = json.dumps(details)

        try:
            with sqlite3.connect(cls.db_path) as conn:
                conn.execute("""
                    INSERT INTO app_logs (timestamp, level, source, message, details)
                    VALUES (?, ?, ?, ?, ?)
                """, (datetime.now().isoformat(), level, source, message, details))
                conn.commit()
        except sqlite3.Error as e:
            # The activity log is best effort; the operation that logged carries on
            logger.warning(f"Activity log write failed: {e}")

    @classmethod
    def debug(cls, source, message, details=None):
        cls.log('DEBUG', source, message, details)

    @classmethod
    def info(cls, source, message, details=None):
        cls.log('INFO', source, message, details)

    @classmethod
    def warning(cls, source, message, details=None):
        cls.log('WARNING', source, message, details)

    @classmethod
    def error(cls, source, message, details=None):
        cls.log('ERROR', source, message, details)

    @classmethod
    def get_recent_logs(cls, limit=50, source=None):
        """Newest first. Returns [] when the log database is not configured."""
        if not cls.db_path or not os.path.exists(cls.db_path):
            return []

        query = "SELECT timestamp, level, source, message, details FROM app_logs"
        params = []
        if source:
            query += " WHERE source = ?"
            params.append(source)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        with sqlite3.connect(cls.db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(query, params).fetchall()

        entries = []
        for row in rows:
            entry = dict(row)
            if entry['details']:
                try:
                    entry['details'] = json.loads(entry['details'])
                except ValueError:
                    pass
            entries.append(entry)
        return entries

    @classmethod
    def cleanup_old_logs(cls, days_to_keep=30):
        """Clean up old log entries"""
        if not cls.db_path or not os.path.exists(cls.db_path):
            return 0

        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()
        try:
            with sqlite3.connect(cls.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM app_logs WHERE timestamp < ?", (cutoff_iso,))
                deleted_count = cursor.rowcount
                conn.commit()
        except sqlite3.Error as e:
            logger.warning(f"Failed to clean up activity log: {e}")
            return 0

        if deleted_count:
            logger.info(f"Cleaned up {deleted_count} old activity log entries")
        return deleted_count


def db_log(level, source, message, details=None):
    """Shortcut for LoggingService.log"""
    LoggingService.log(level, source, message, details)
