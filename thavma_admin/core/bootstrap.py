"""
Bootstrap
=========

Explicit, idempotent setup steps run by deployment tooling (see cli.py):
schema creation, default admin, sample projects and the legacy image
migration. Schema creation (with the legacy image fold) runs at app start;
seeding only runs when asked for.
"""

from .config import get_config_value
from .logging_service import LoggingService
from ..modules.auth.database import AdminDatabase
from ..modules.contact.database import ContactDatabase
from ..modules.email.email_service import EmailService
from ..modules.projects.database import ProjectDatabase

SAMPLE_PROJECTS = [
    {
        'title': "Modern MRI Suite",
        'description': "Complete MRI room design with RF shielding and patient comfort features",
        'images': [
            "https://images.unsplash.com/photo-1518770660439-4636190af475?w=800&h=600&fit=crop",
            "https://images.unsplash.com/photo-1559757148-5c350d0d3c56?w=800&h=600&fit=crop",
        ],
        'category': "Medical",
    },
    {
        'title': "Luxury Residential Interior",
        'description': "Warm and elegant living space with custom furnishings",
        'images': [
            "https://images.unsplash.com/photo-1721322800607-8c38375eef04?w=800&h=600&fit=crop",
            "https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=800&h=600&fit=crop",
        ],
        'category': "Residential",
    },
]


def init_db():
    """Create every table, add columns older schemas lack and fold legacy images"""
    LoggingService.init_table()
    AdminDatabase.init_table()
    ProjectDatabase.init_table()
    ContactDatabase.init_table()
    EmailService.init_table()
    migrate_legacy_images()


def create_default_admin():
    """Create the configured default admin if that username is absent.

    Returns True when an admin was created.
    """
    username = get_config_value('DEFAULT_ADMIN_USERNAME', 'admin')
    if AdminDatabase.get_admin_by_username(username):
        return False

    admin_id = AdminDatabase.create_admin(
        username,
        get_config_value('DEFAULT_ADMIN_PASSWORD', 'password'),
        get_config_value('DEFAULT_ADMIN_EMAIL', 'admin@thavmasolutions.com'),
    )
    if admin_id:
        LoggingService.info('bootstrap', f"Default admin user '{username}' created")
        return True
    return False


def create_sample_projects():
    """Insert the sample projects when the projects table is empty; returns how many were added"""
    if ProjectDatabase.count() > 0:
        return 0

    inserted = ProjectDatabase.insert_many(SAMPLE_PROJECTS)
    LoggingService.info('bootstrap', f"{inserted} sample projects created")
    return inserted


def migrate_legacy_images():
    """Fold legacy single-image records into the images list"""
    migrated = ProjectDatabase.migrate_legacy_images()
    if migrated:
        LoggingService.info('bootstrap', f"Migrated {migrated} legacy project image(s)")
    return migrated
