"""
Auth Module

Provides admin authentication for the API:
- Username/password login against salted password hashes
- Signed, 24-hour bearer tokens
- token_required decorator for protected routes
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from . import routes
from .database import AdminDatabase
from .utils import issue_token, verify_token, token_required, TokenError

__all__ = ['auth_bp', 'AdminDatabase', 'issue_token', 'verify_token',
           'token_required', 'TokenError']
