"""
Ops Routes
==========

Public liveness and health endpoints.
"""

import os
from datetime import datetime, timezone

from flask import jsonify

from . import ops_bp
from ...core.database import Database
from ...core.logging_service import LoggingService
from ...core.storage import get_upload_dir

SERVICE_NAME = 'thavma-admin-server'


def _check_database():
    try:
        Database.ping()
        return {'ok': True}
    except Exception as e:
        return {'ok': False, 'error': str(e)}


def _check_uploads():
    try:
        upload_dir = get_upload_dir()
        return {'ok': os.access(upload_dir, os.W_OK), 'path': upload_dir}
    except OSError as e:
        return {'ok': False, 'error': str(e)}


def _build_health_response():
    """Build the health check response dict."""
    database = _check_database()
    uploads = _check_uploads()

    if not database['ok']:
        status = 'critical'
    elif not uploads['ok']:
        status = 'warning'
    else:
        status = 'ok'

    return {
        'status': status,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'checks': {
            'database': database,
            'uploads': uploads,
        },
    }, status


@ops_bp.route('/')
def root():
    """Liveness payload"""
    return jsonify({
        'status': 'ok',
        'service': SERVICE_NAME,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@ops_bp.route('/health')
def health_check():
    """Health endpoint for uptime monitors."""
    data, status = _build_health_response()
    if status == 'critical':
        LoggingService.error('ops', 'Health check failed', data['checks'])
        return jsonify(data), 503
    return jsonify(data), 200
