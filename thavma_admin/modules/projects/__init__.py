"""
Projects Module
===============

Portfolio project records.

Provides:
- Public project listing with absolute image URLs
- Project creation and editing with image upload
- Project deletion
- Legacy single-image migration
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__)

from . import routes
from .database import ProjectDatabase
from .models import CATEGORIES

__all__ = ['projects_bp', 'ProjectDatabase', 'CATEGORIES']
