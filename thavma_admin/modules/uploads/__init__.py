"""
Uploads Module
==============

Serves uploaded project images from UPLOAD_FOLDER at /uploads/<filename>.
"""

from flask import Blueprint

uploads_bp = Blueprint('uploads', __name__)

from . import routes

__all__ = ['uploads_bp']
