import time
from functools import wraps

from authlib.jose import jwt, JoseError
from flask import g, jsonify, request

from ...core.config import get_config_value
from ...core.logging_service import LoggingService

JWT_ALGORITHM = 'HS256'


class TokenError(Exception):
    """Token could not be decoded, had a bad signature or has expired"""


def _secret():
    return get_config_value('JWT_SECRET', 'your-secret-key')


def issue_token(admin, expires_in=None):
    """Sign a session token for an admin record (needs 'username' and 'id')"""
    if expires_in is None:
        expires_in = int(get_config_value('JWT_EXPIRES_HOURS', 24)) * 3600
    now = int(time.time())
    payload = {
        'username': admin['username'],
        'id': admin['id'],
        'iat': now,
        'exp': now + expires_in,
    }
    token = jwt.encode({'alg': JWT_ALGORITHM}, payload, _secret())
    return token.decode('utf-8') if isinstance(token, bytes) else token


def verify_token(token):
    """Decode a session token and return its principal {'username', 'id'}"""
    try:
        claims = jwt.decode(token, _secret())
        claims.validate()
    except JoseError as e:
        raise TokenError(str(e)) from e
    except ValueError as e:
        # Malformed segments that never reach the JOSE parser
        raise TokenError(str(e)) from e

    if 'username' not in claims or 'exp' not in claims:
        raise TokenError('Token is missing required claims')
    return {'username': claims['username'], 'id': claims.get('id')}


def get_bearer_token():
    """Token part of 'Authorization: Bearer <token>', or None"""
    auth_header = request.headers.get('Authorization', '')
    parts = auth_header.split(' ')
    if len(parts) >= 2 and parts[1]:
        return parts[1]
    return None


def token_required(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            return jsonify({'error': 'Access token required'}), 401

        try:
            principal = verify_token(token)
        except TokenError as e:
            LoggingService.log_security_event('Rejected bearer token', {'reason': str(e)})
            return jsonify({'error': 'Invalid token'}), 403

        # Attach the principal for downstream handlers
        g.current_admin = principal
        return f(*args, **kwargs)

    return decorated_function
