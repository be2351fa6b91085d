"""
Shared fixtures: a fully initialised app on a throwaway database and upload folder.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest

from thavma_admin import create_app
from thavma_admin.modules.auth.database import AdminDatabase

SERVER_URL = "http://testserver"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse"
JWT_SECRET = "test-secret"


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for the test database and uploads, cleaned up after."""
    d = tempfile.mkdtemp(prefix="thavma-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def db_path(tmp_dir):
    return os.path.join(tmp_dir, "test.db")


@pytest.fixture
def app_config(tmp_dir, db_path):
    """Settings shared by every test app, pointing at the throwaway directory."""
    return {
        "TESTING": True,
        "DATABASE_URL": f"sqlite:///{db_path}",
        "UPLOAD_FOLDER": os.path.join(tmp_dir, "uploads"),
        "SERVER_URL": SERVER_URL,
        "JWT_SECRET": JWT_SECRET,
        "EMAIL_PROVIDER": "smtp",
        "EMAIL_USER": "no-reply@thavma.test",
        "EMAIL_PASS": "app-password",
        "CONTACT_STRICT_STATUS": False,
    }


@pytest.fixture
def app(app_config):
    """Fully initialised Flask app with every module registered."""
    return create_app(app_config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(app):
    """An admin account in the test database."""
    with app.app_context():
        admin_id = AdminDatabase.create_admin(ADMIN_USERNAME, ADMIN_PASSWORD, "admin@thavma.test")
    return {"id": admin_id, "username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


@pytest.fixture
def auth_headers(client, admin):
    """Authorization header for the test admin, obtained through /api/login."""
    response = client.post("/api/login", json={
        "username": admin["username"],
        "password": admin["password"],
    })
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def upload_dir(app):
    return app.config["UPLOAD_FOLDER"]
