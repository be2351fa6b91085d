"""
Email Module
============

Outbound email for replies to contact messages, over SMTP or the Resend API.
"""

from .email_service import EmailService, email_service

__all__ = ['EmailService', 'email_service']
