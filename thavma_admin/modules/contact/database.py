from ...core.config import Config
from ...core.database import Database, utcnow_iso
from .models import MessageStatus, validate_message

TABLE = Config.CONTACT_TABLE


class ContactDatabase:
    @staticmethod
    def init_table():
        """Create the contact_messages table if it doesn't exist"""
        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    phone TEXT,
                    message TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'unread',
                    response TEXT,
                    responded_at TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')
            cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_contact_status ON {TABLE}(status)')
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def create(data):
        """Store a visitor's message; it always starts unread"""
        fields = validate_message(data)
        now = utcnow_iso()

        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                INSERT INTO {TABLE} (name, email, phone, message, status, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            ''', (fields['name'], fields['email'], fields['phone'], fields['message'],
                  MessageStatus.UNREAD.value, now, now))
            conn.commit()
            message_id = cursor.lastrowid
        finally:
            conn.close()

        return ContactDatabase.get(message_id)

    @staticmethod
    def get_all():
        """All messages, newest first"""
        conn = Database.connect()
        try:
            rows = conn.execute(f'''
                SELECT * FROM {TABLE} ORDER BY created_at DESC, id DESC
            ''').fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def get(message_id):
        conn = Database.connect()
        try:
            row = conn.execute(f'SELECT * FROM {TABLE} WHERE id = ?', (message_id,)).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    @staticmethod
    def update_status(message_id, status):
        """Set status only; returns the updated message or None if missing"""
        status = MessageStatus.parse(status)

        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                UPDATE {TABLE} SET status = ?, updated_at = ? WHERE id = ?
            ''', (status.value, utcnow_iso(), message_id))
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()

        return ContactDatabase.get(message_id)

    @staticmethod
    def mark_responded(message_id, response):
        """Record a sent reply: status responded, response text and timestamp"""
        now = utcnow_iso()
        response = response.strip() if isinstance(response, str) else response

        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                UPDATE {TABLE}
                SET status = ?, response = ?, responded_at = ?, updated_at = ?
                WHERE id = ?
            ''', (MessageStatus.RESPONDED.value, response, now, now, message_id))
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()

        return ContactDatabase.get(message_id)
