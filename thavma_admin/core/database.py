import json
import os
import sqlite3
from datetime import datetime, timezone

from .config import get_config_value


class Database:
    """Thin sqlite3 access shared by every module's database class."""

    @staticmethod
    def resolve_path(database_url=None):
        """Turn a DATABASE_URL (sqlite:///path or plain path) into a file path"""
        url = database_url or get_config_value('DATABASE_URL', 'databases/thavma.db')
        if url.startswith('sqlite:///'):
            return url[len('sqlite:///'):]
        if url.startswith('sqlite://'):
            return url[len('sqlite://'):]
        return url

    @staticmethod
    def connect(path=None):
        """Open a connection with dict-like rows"""
        db_path = path or Database.resolve_path()
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def get_columns(conn, table):
        cursor = conn.cursor()
        cursor.execute(f"PRAGMA table_info({table})")
        return [column[1] for column in cursor.fetchall()]

    @staticmethod
    def add_missing_columns(conn, table, new_columns):
        """Migration: add any column in new_columns that the table lacks"""
        columns = Database.get_columns(conn, table)
        cursor = conn.cursor()
        for col_name, col_type in new_columns:
            if col_name not in columns:
                cursor.execute(f'ALTER TABLE {table} ADD COLUMN {col_name} {col_type}')
        conn.commit()

    @staticmethod
    def ping():
        """Return True if the database answers a trivial query"""
        conn = Database.connect()
        try:
            conn.execute("SELECT 1").fetchone()
            return True
        finally:
            conn.close()


def utcnow_iso():
    """Current UTC time as an ISO-8601 string (microsecond precision keeps ordering stable)"""
    return datetime.now(timezone.utc).isoformat()


def dump_list(values):
    return json.dumps(list(values)) if values is not None else None


def load_list(raw):
    """Decode a JSON list column; NULL or garbage becomes an empty list"""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return value if isinstance(value, list) else []
