"""
Thavma Admin Core
=================

Core utilities and shared functionality for the admin server modules.
"""

from .config import Config, get_config_value
from .database import Database
from .errors import ValidationError, UploadError
from .logging_service import LoggingService

__all__ = ['Config', 'get_config_value', 'Database', 'ValidationError',
           'UploadError', 'LoggingService']
