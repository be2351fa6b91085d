"""
Email Service Module
====================

Outbound mail for admin replies to contact messages.
Provider is selected via EMAIL_PROVIDER config ('smtp' or 'resend').
"""

import logging
import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import resend

from ...core.config import Config
from ...core.database import Database

# Rejects consecutive dots, leading/trailing dots in local part
_VALID_EMAIL = re.compile(r'^[a-zA-Z0-9_%+-]+(\.[a-zA-Z0-9_%+-]+)*@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$')

logger = logging.getLogger(__name__)


class EmailService:
    """
    Email service supporting an SMTP relay (e.g. Gmail) and Resend.

    Configuration (set in Flask app.config):
        EMAIL_PROVIDER: 'smtp' (default) or 'resend'
        EMAIL_USER: Relay account and sender address
        EMAIL_PASS: Relay password/app password (required if provider is 'smtp')
        EMAIL_HOST: SMTP server host (default: 'smtp.gmail.com')
        EMAIL_PORT: SMTP server port (default: 587)
        RESEND_API_KEY: Your Resend API key (required if provider is 'resend')
        EMAIL_RESPONSE_SUBJECT: Subject line of contact replies
    """

    def __init__(self, app=None):
        self.provider = 'smtp'
        self.sender_email = None
        self.smtp_host = 'smtp.gmail.com'
        self.smtp_port = 587
        self.smtp_password = None
        self.api_key = None
        self.response_subject = 'Response from Thavma Solutions'

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize email service with Flask app configuration"""
        self.provider = (app.config.get('EMAIL_PROVIDER') or 'smtp').lower()
        logger.info(f"Initializing email service (provider: {self.provider})")

        self.sender_email = app.config.get('EMAIL_USER')
        self.response_subject = app.config.get('EMAIL_RESPONSE_SUBJECT') or self.response_subject

        if self.provider == 'resend':
            self._init_resend(app)
        else:
            self._init_smtp(app)

    def _init_resend(self, app):
        """Initialize Resend provider"""
        self.api_key = app.config.get('RESEND_API_KEY')

        if not self.api_key:
            logger.warning("RESEND_API_KEY not configured - email sending disabled")
            return

        resend.api_key = self.api_key
        logger.info("Resend API client initialized successfully")

    def _init_smtp(self, app):
        """Initialize SMTP provider (e.g. Gmail)"""
        self.smtp_host = app.config.get('EMAIL_HOST') or 'smtp.gmail.com'
        self.smtp_port = int(app.config.get('EMAIL_PORT') or 587)
        self.smtp_password = app.config.get('EMAIL_PASS')

        if not self.smtp_password:
            logger.warning("EMAIL_PASS not configured - SMTP email sending disabled")
            return

        logger.info(f"SMTP configured: {self.smtp_host}:{self.smtp_port}")

    @staticmethod
    def init_table():
        """Create the email_logs table if it doesn't exist"""
        conn = Database.connect()
        try:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {Config.EMAIL_LOGS_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    recipient TEXT NOT NULL,
                    subject TEXT NOT NULL,
                    email_type TEXT,
                    status TEXT NOT NULL,
                    error_message TEXT,
                    sent_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def _log_email(self, recipient: str, subject: str, email_type: str,
                   status: str, error_message: str = None):
        """Log email attempt to database"""
        try:
            conn = Database.connect()
            try:
                conn.execute(f"""
                    INSERT INTO {Config.EMAIL_LOGS_TABLE} (recipient, subject, email_type, status, error_message)
                    VALUES (?, ?, ?, ?, ?)
                """, (recipient, subject, email_type, status, error_message))
                conn.commit()
            finally:
                conn.close()
        except Exception as e:
            logger.error(f"Failed to log email to database: {e}")

    def send_email(self, to: str, subject: str, html_body: str,
                   text_body: Optional[str] = None, email_type: str = 'other') -> bool:
        """
        Deliver one message to one address through the configured provider.

        Every attempt that gets as far as a provider is written to email_logs.

        Returns:
            bool: True once the provider has accepted the message
        """
        if not self.sender_email:
            logger.error(f"EMAIL_USER not configured, cannot send '{subject}'")
            return False

        if not to or not _VALID_EMAIL.match(to):
            logger.warning(f"Refusing to send '{subject}' to invalid address: {to!r}")
            return False

        deliver = self._send_via_resend if self.provider == 'resend' else self._send_via_smtp
        try:
            deliver(to, subject, html_body, text_body)
        except Exception as e:
            logger.error(f"Sending '{subject}' to {to} failed: {e}")
            self._log_email(to, subject, email_type, 'failed', str(e))
            return False

        self._log_email(to, subject, email_type, 'sent')
        return True

    def _send_via_resend(self, to: str, subject: str, html_body: str,
                         text_body: Optional[str] = None):
        """Hand the message to the Resend API; raises if it is not accepted"""
        if not self.api_key:
            raise RuntimeError("RESEND_API_KEY not configured")

        params = {"from": self.sender_email, "to": to, "subject": subject, "html": html_body}
        if text_body:
            params["text"] = text_body

        result = resend.Emails.send(params)
        if not result or not result.get('id'):
            raise RuntimeError(f"Resend did not accept the message: {result}")
        logger.info(f"Resend accepted '{subject}' for {to} (id {result['id']})")

    def _send_via_smtp(self, to: str, subject: str, html_body: str,
                       text_body: Optional[str] = None):
        """Relay the message over SMTP with STARTTLS"""
        if not self.smtp_password:
            raise RuntimeError("EMAIL_PASS not configured")

        msg = MIMEMultipart('alternative')
        msg['From'] = self.sender_email
        msg['To'] = to
        msg['Subject'] = subject
        if text_body:
            msg.attach(MIMEText(text_body, 'plain', 'utf-8'))
        msg.attach(MIMEText(html_body, 'html', 'utf-8'))

        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            server.starttls()
            server.login(self.sender_email, self.smtp_password)
            server.send_message(msg)
        logger.info(f"SMTP relay {self.smtp_host} accepted '{subject}' for {to}")

    # ==================== Contact Replies ====================

    def send_contact_response(self, message: dict, response_text: str) -> bool:
        """Email the admin's reply to the sender of a contact message.

        The reply text goes into the HTML body as-is.
        """
        html_body = f"<p>{response_text}</p>"
        return self.send_email(
            message['email'],
            self.response_subject,
            html_body,
            text_body=response_text,
            email_type='contact_response',
        )


# Global instance, configured by ThavmaAdmin.init_app
email_service = EmailService()
