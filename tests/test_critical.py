"""
Critical Integration Tests for the Thavma admin server
======================================================

Covers app assembly, liveness/health, JSON error pages and the
bootstrap CLI commands.
Run with: pytest tests/test_critical.py -v
"""

import os
import sqlite3

from thavma_admin import ThavmaAdmin
from thavma_admin.core import bootstrap
from thavma_admin.core.database import Database
from thavma_admin.modules.auth.database import AdminDatabase
from thavma_admin.modules.projects.database import ProjectDatabase


# ---------------------------------------------------------------------------
# 1. App initialisation -- every module registered, extension stored
# ---------------------------------------------------------------------------

EXPECTED_MODULES = ["ops", "auth", "projects", "contact", "uploads"]


def test_extension_registered(app):
    ext = app.extensions["thavma_admin"]
    assert isinstance(ext, ThavmaAdmin)
    assert ext.get_registered_modules() == EXPECTED_MODULES


def test_expected_routes_exist(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for rule in [
        "/", "/health", "/api/login", "/api/projects",
        "/api/projects/<int:project_id>", "/api/contact",
        "/api/contact/<int:message_id>", "/api/contact/<int:message_id>/respond",
        "/uploads/<path:filename>",
    ]:
        assert rule in rules, f"{rule} missing. Routes: {sorted(rules)}"


def test_tables_created_on_init(app):
    """Schema exists right after init, but nothing is seeded."""
    with app.app_context():
        path = Database.resolve_path()
        assert AdminDatabase.count_admins() == 0
        assert ProjectDatabase.count() == 0

    conn = sqlite3.connect(path)
    try:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    finally:
        conn.close()
    assert {"admin", "projects", "contact_messages", "app_logs", "email_logs"} <= tables


def test_database_url_forms(app):
    assert Database.resolve_path("sqlite:///data/app.db") == "data/app.db"
    assert Database.resolve_path("/var/lib/thavma.db") == "/var/lib/thavma.db"


# ---------------------------------------------------------------------------
# 2. Liveness and health
# ---------------------------------------------------------------------------

def test_root_liveness(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["service"] == "thavma-admin-server"
    assert "timestamp" in data


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["checks"]["database"]["ok"] is True
    assert data["checks"]["uploads"]["ok"] is True


# ---------------------------------------------------------------------------
# 3. Error pages are single-field JSON
# ---------------------------------------------------------------------------

def test_unknown_route_is_json_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_wrong_method_is_json(client):
    response = client.patch("/api/projects")
    assert response.status_code == 405
    assert list(response.get_json().keys()) == ["error"]


# ---------------------------------------------------------------------------
# 4. Bootstrap -- explicit and idempotent
# ---------------------------------------------------------------------------

def test_seed_command_creates_admin_and_samples(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed"])
    assert result.exit_code == 0, result.output
    assert "Default admin user created" in result.output

    with app.app_context():
        assert AdminDatabase.verify("admin", "password")
        assert ProjectDatabase.count() == 2


def test_seed_is_idempotent(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed"])
    result = runner.invoke(args=["seed"])

    assert result.exit_code == 0, result.output
    assert "already exists" in result.output
    with app.app_context():
        assert AdminDatabase.count_admins() == 1
        assert ProjectDatabase.count() == 2


def test_seed_without_samples(app):
    result = app.test_cli_runner().invoke(args=["seed", "--no-samples"])
    assert result.exit_code == 0, result.output
    with app.app_context():
        assert ProjectDatabase.count() == 0


def test_sample_projects_skipped_when_projects_exist(app):
    with app.app_context():
        ProjectDatabase.create({
            "title": "Clinic", "description": "Exam rooms",
            "category": "Medical", "images": ["https://cdn.example.com/a.jpg"],
        })
        assert bootstrap.create_sample_projects() == 0
        assert ProjectDatabase.count() == 1


def test_prune_logs_command(app):
    with app.app_context():
        conn = Database.connect()
        try:
            conn.execute(
                "INSERT INTO app_logs (timestamp, level, source, message) VALUES (?, ?, ?, ?)",
                ("2001-01-01T00:00:00+00:00", "INFO", "test", "ancient"))
            conn.commit()
        finally:
            conn.close()

    result = app.test_cli_runner().invoke(args=["prune-logs", "--days", "1"])
    assert result.exit_code == 0, result.output
    assert "Deleted 1 log entries" in result.output


def test_init_db_command(app):
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Database initialized" in result.output
    assert os.path.isfile(app.config["DATABASE_URL"][len("sqlite:///"):])


def test_core_public_surface():
    from thavma_admin import core

    assert sorted(core.__all__) == sorted([
        "Config", "get_config_value", "Database", "ValidationError",
        "UploadError", "LoggingService",
    ])
    assert not hasattr(core.logging_service, "logger")
