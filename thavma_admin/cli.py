"""
Flask CLI commands for deployment tooling.

    flask --app app init-db
    flask --app app seed [--no-samples]
    flask --app app migrate-images
    flask --app app prune-logs --days 30
"""

import click
from flask.cli import with_appcontext

from .core import bootstrap
from .core.logging_service import LoggingService


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create database tables."""
    bootstrap.init_db()
    click.echo('Database initialized')


@click.command('seed')
@click.option('--samples/--no-samples', default=True, help='Also insert sample projects when none exist.')
@with_appcontext
def seed_command(samples):
    """Create the default admin (and sample projects) if missing."""
    bootstrap.init_db()
    if bootstrap.create_default_admin():
        click.echo('Default admin user created')
    else:
        click.echo('Default admin user already exists')

    if samples:
        added = bootstrap.create_sample_projects()
        click.echo(f'{added} sample projects created')


@click.command('migrate-images')
@with_appcontext
def migrate_images_command():
    """Move legacy single-image values into the images list."""
    bootstrap.init_db()
    migrated = bootstrap.migrate_legacy_images()
    click.echo(f'Migrated {migrated} project(s)')


@click.command('prune-logs')
@click.option('--days', default=30, show_default=True, help='Keep this many days of logs.')
@with_appcontext
def prune_logs_command(days):
    """Delete application log entries older than --days."""
    deleted = LoggingService.cleanup_old_logs(days)
    click.echo(f'Deleted {deleted} log entries')


COMMANDS = [init_db_command, seed_command, migrate_images_command, prune_logs_command]
