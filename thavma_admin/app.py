"""
Application assembly: the ThavmaAdmin extension registers every module on a
Flask app, and create_app builds a ready-to-serve app from the environment.
"""

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .cli import COMMANDS
from .core import bootstrap
from .core.config import Config, CONFIG_KEYS
from .core.logging_service import LoggingService
from .modules.auth import auth_bp
from .modules.contact import contact_bp
from .modules.email import email_service
from .modules.ops import ops_bp
from .modules.projects import projects_bp
from .modules.uploads import uploads_bp

MODULES = {
    'ops': ops_bp,
    'auth': auth_bp,
    'projects': projects_bp,
    'contact': contact_bp,
    'uploads': uploads_bp,
}


class ThavmaAdmin:
    """Flask extension wiring config, CORS, blueprints, error handlers and CLI commands."""

    def __init__(self, app=None):
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        # Values already in app.config (tests, deployments) win over the environment
        for key in CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))

        # Whole multipart bodies: every file at the limit plus form fields
        if app.config.get('MAX_CONTENT_LENGTH') is None:
            app.config['MAX_CONTENT_LENGTH'] = (
                app.config['MAX_UPLOAD_FILES'] * app.config['MAX_UPLOAD_SIZE'] + 1024 * 1024)

        CORS(app, origins=app.config['CORS_ORIGINS'])

        for name, blueprint in MODULES.items():
            app.register_blueprint(blueprint)
            self._registered.append(name)

        self._register_error_handlers(app)

        for command in COMMANDS:
            app.cli.add_command(command)

        email_service.init_app(app)

        # Schema only; seeding stays an explicit CLI step
        with app.app_context():
            bootstrap.init_db()

        app.extensions['thavma_admin'] = self

    def get_registered_modules(self):
        return list(self._registered)

    @staticmethod
    def _register_error_handlers(app):
        @app.errorhandler(HTTPException)
        def handle_http_error(e):
            """Single-field JSON for 404/405/413 and friends"""
            if e.code == 413:
                message = 'File too large'
            elif e.code == 404:
                message = 'Not found'
            else:
                message = e.name
            return jsonify({'error': message}), e.code

        @app.errorhandler(Exception)
        def handle_unexpected_error(e):
            LoggingService.log_error_with_traceback('app', e)
            return jsonify({'error': 'Internal server error'}), 500


def create_app(config=None):
    """Build the admin server app; `config` entries override environment settings"""
    app = Flask(__name__)
    if config:
        app.config.update(config)
    ThavmaAdmin(app)
    return app
