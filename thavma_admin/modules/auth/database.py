import sqlite3
from werkzeug.security import generate_password_hash, check_password_hash

from ...core.config import Config
from ...core.database import Database, utcnow_iso


class AdminDatabase:
    @staticmethod
    def _get_connection():
        """Get database connection"""
        return Database.connect()

    @staticmethod
    def init_table():
        """Create the admin table if it doesn't exist"""
        conn = AdminDatabase._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {Config.ADMIN_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT UNIQUE NOT NULL,
                    password_hash TEXT NOT NULL,
                    email TEXT,
                    created_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _hash_password(password):
        """Salted one-way hash"""
        return generate_password_hash(password)

    @staticmethod
    def _verify_password(password, password_hash):
        """Verify password against hash"""
        return check_password_hash(password_hash, password)

    @staticmethod
    def get_admin_by_username(username):
        """Get admin by username"""
        conn = AdminDatabase._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"""
                SELECT * FROM {Config.ADMIN_TABLE} WHERE username = ?
            """, (username,))
            row = cursor.fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    @staticmethod
    def count_admins():
        conn = AdminDatabase._get_connection()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {Config.ADMIN_TABLE}").fetchone()[0]
        finally:
            conn.close()

    @staticmethod
    def create_admin(username, password, email=None):
        """Create a new admin, returns its id or None if the username is taken"""
        conn = AdminDatabase._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"""
                INSERT INTO {Config.ADMIN_TABLE} (username, password_hash, email, created_at)
                VALUES (?, ?, ?, ?)
            """, (username, AdminDatabase._hash_password(password), email, utcnow_iso()))
            conn.commit()
            return cursor.lastrowid
        except sqlite3.IntegrityError:
            return None  # Admin already exists
        finally:
            conn.close()

    @staticmethod
    def verify_credentials(username, password):
        """Return the admin record when username and password match, else None.

        Unknown usernames and wrong passwords look the same to the caller.
        """
        if not username or not isinstance(username, str):
            return None
        if not isinstance(password, str):
            return None

        admin = AdminDatabase.get_admin_by_username(username)
        if admin and AdminDatabase._verify_password(password, admin['password_hash']):
            return admin
        return None

    @staticmethod
    def verify(username, password):
        return AdminDatabase.verify_credentials(username, password) is not None
