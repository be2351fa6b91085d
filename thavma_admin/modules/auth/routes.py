from flask import request, jsonify

from . import auth_bp
from .database import AdminDatabase
from .utils import issue_token
from ...core.logging_service import LoggingService


@auth_bp.route('/api/login', methods=['POST'])
def login():
    """Exchange username/password for a session token"""
    try:
        data = request.get_json(silent=True) or {}
        username = data.get('username')
        password = data.get('password')

        admin = AdminDatabase.verify_credentials(username, password)
        if not admin:
            # Same answer for unknown user and wrong password
            LoggingService.log_security_event('Failed admin login', {'username': str(username)})
            return jsonify({'error': 'Invalid credentials'}), 401

        token = issue_token(admin)
        LoggingService.log_user_action('auth', 'login', user_id=admin['id'])
        return jsonify({'token': token, 'username': admin['username']})
    except Exception as e:
        LoggingService.log_error_with_traceback('auth', e, {'route': 'login'})
        return jsonify({'error': 'Internal server error'}), 500
