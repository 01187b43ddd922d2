"""Startup checks: database connectivity, PostGIS and schema."""
import logging

import click
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from poi_api.errors import BootstrapError
from poi_api.extensions import db

logger = logging.getLogger(__name__)


def bootstrap(app) -> None:
    """
    Prepare the database before the app starts serving.

    Each step is idempotent. Any failure raises BootstrapError; there is no
    degraded mode where the API runs without PostGIS or the pois table.
    """
    with app.app_context():
        try:
            db.session.execute(text('SELECT 1'))
            logger.info('Database connection established')

            db.session.execute(text('CREATE EXTENSION IF NOT EXISTS postgis'))
            db.session.commit()
            logger.info('PostGIS extension present')

            # Import models so their tables are registered
            from poi_api import models  # noqa: F401
            db.create_all()
            logger.info('Schema ensured')
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise BootstrapError(f'Database bootstrap failed: {exc}') from exc
        finally:
            db.session.remove()


def register_commands(app):
    """Register CLI commands."""

    @app.cli.command('bootstrap-db')
    def bootstrap_db():
        """Create the postgis extension and the pois table if missing."""
        try:
            bootstrap(app)
        except BootstrapError as exc:
            raise click.ClickException(str(exc))
        click.echo('Database ready.')
