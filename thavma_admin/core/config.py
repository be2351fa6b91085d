import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Thavma admin server.
    Deployments provide secrets and paths via environment variables.
    """
    # Server settings
    PORT = int(os.getenv('PORT', '3001'))
    SERVER_URL = os.getenv('SERVER_URL', f"http://localhost:{PORT}")
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Session tokens
    JWT_SECRET = os.getenv('JWT_SECRET', 'your-secret-key')
    JWT_EXPIRES_HOURS = int(os.getenv('JWT_EXPIRES_HOURS', '24'))

    # Database connection string - sqlite:///path or a plain file path
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///databases/thavma.db')

    # Uploads
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', 'uploads')
    MAX_UPLOAD_FILES = 10
    MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB per file

    # Email settings
    # Gmail-style SMTP relay by default, Resend as the alternative provider
    EMAIL_PROVIDER = os.getenv('EMAIL_PROVIDER', 'smtp')
    EMAIL_USER = os.getenv('EMAIL_USER')
    EMAIL_PASS = os.getenv('EMAIL_PASS')
    EMAIL_HOST = os.getenv('EMAIL_HOST', 'smtp.gmail.com')
    EMAIL_PORT = int(os.getenv('EMAIL_PORT', '587'))
    RESEND_API_KEY = os.getenv('RESEND_API_KEY') or os.getenv('RESEND')
    EMAIL_RESPONSE_SUBJECT = os.getenv('EMAIL_RESPONSE_SUBJECT', 'Response from Thavma Solutions')

    # Bootstrap admin - weak by default, change it after the first login
    DEFAULT_ADMIN_USERNAME = os.getenv('DEFAULT_ADMIN_USERNAME', 'admin')
    DEFAULT_ADMIN_PASSWORD = os.getenv('DEFAULT_ADMIN_PASSWORD', 'password')
    DEFAULT_ADMIN_EMAIL = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@thavmasolutions.com')

    # Contact messages
    CONTACT_STRICT_STATUS = os.getenv('CONTACT_STRICT_STATUS', '0').lower() in ('1', 'true', 'yes')

    # Table names
    ADMIN_TABLE = "admin"
    PROJECTS_TABLE = "projects"
    CONTACT_TABLE = "contact_messages"
    LOGS_TABLE = "app_logs"
    EMAIL_LOGS_TABLE = "email_logs"


CONFIG_KEYS = [
    'PORT', 'SERVER_URL', 'CORS_ORIGINS', 'JWT_SECRET', 'JWT_EXPIRES_HOURS',
    'DATABASE_URL', 'UPLOAD_FOLDER', 'MAX_UPLOAD_FILES', 'MAX_UPLOAD_SIZE',
    'EMAIL_PROVIDER', 'EMAIL_USER', 'EMAIL_PASS', 'EMAIL_HOST', 'EMAIL_PORT',
    'RESEND_API_KEY', 'EMAIL_RESPONSE_SUBJECT', 'DEFAULT_ADMIN_USERNAME',
    'DEFAULT_ADMIN_PASSWORD', 'DEFAULT_ADMIN_EMAIL', 'CONTACT_STRICT_STATUS',
]


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
