"""
Contact Module
==============

Stores contact-form submissions and lets the admin triage and answer them.
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__)

from . import routes
from .database import ContactDatabase
from .models import MessageStatus, is_forward_transition

__all__ = ['contact_bp', 'ContactDatabase', 'MessageStatus', 'is_forward_transition']
