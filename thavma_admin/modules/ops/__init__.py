"""
Ops Module
==========

Liveness endpoints for uptime monitors and deployment platforms.

- GET /        minimal liveness payload
- GET /health  database and upload folder checks (503 when the database is down)
"""

from flask import Blueprint

ops_bp = Blueprint('ops', __name__)

from . import routes

__all__ = ['ops_bp']
