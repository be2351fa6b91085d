"""
Centralized logging service for the Thavma admin server.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta, timezone

from flask import request, has_request_context

from .config import Config
from .database import Database

logging.basicConfig(level=logging.INFO)
console = logging.getLogger('thavma_admin')

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def init_table():
        """Ensure the app_logs table exists"""
        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {Config.LOGS_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT,
                    user_id TEXT
                )
            """)
            cursor.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON {Config.LOGS_TABLE}(timestamp DESC)
            """)
            cursor.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_logs_level
                ON {Config.LOGS_TABLE}(level)
            """)
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the console and the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, projects, contact, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        ip_address, user_agent, request_path = LoggingService._get_request_context()

        console.log(_LEVELS.get(level, logging.INFO), "[%s] %s%s", source, message,
                    f" ({request_path})" if request_path else "")

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        try:
            conn = Database.connect()
            try:
                conn.execute(f"""
                    INSERT INTO {Config.LOGS_TABLE}
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now(timezone.utc).isoformat(), level, source, message, details,
                    ip_address, user_agent, request_path,
                    str(user_id) if user_id is not None else None
                ))
                conn.commit()
            finally:
                conn.close()
        except Exception as e:
            # The console line above already carries the message
            console.warning("Logging service could not store entry: %s", e)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, delete, respond, ...)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}: {error}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries, returns the number removed"""
        cutoff_iso = (datetime.now(timezone.utc) - timedelta(days=days_to_keep)).isoformat()

        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f"""
                DELETE FROM {Config.LOGS_TABLE}
                WHERE timestamp < ?
            """, (cutoff_iso,))
            deleted_count = cursor.rowcount
            conn.commit()
        finally:
            conn.close()

        LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
        return deleted_count
