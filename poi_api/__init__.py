"""Application factory."""
import os
from flask import Flask

from poi_api.config import config
from poi_api.errors import ConfigurationError
from poi_api.extensions import db, migrate, swagger


def create_app(config_name=None):
    """Create and configure the Flask application."""

    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise ConfigurationError(
            'DATABASE_URL is not set. Point it at a PostgreSQL database with PostGIS.'
        )

    from poi_api.logging_config import configure_logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models for migrations
    from poi_api import models  # noqa: F401

    # Store access handed to the request handlers
    from poi_api.services import POIService
    app.extensions['poi_service'] = POIService(
        db.session,
        nearby_limit=app.config['NEARBY_RESULT_LIMIT']
    )

    # Swagger configuration
    app.config['SWAGGER'] = {
        'title': 'POI API',
        'uiversion': 3,
        'specs_route': '/apidocs/'
    }
    swagger.init_app(app)

    # Register blueprints
    from poi_api.api import bp as api_bp
    app.register_blueprint(api_bp, url_prefix='/api/pois')

    # Register error handlers
    from poi_api.errors import register_error_handlers
    register_error_handlers(app)

    # Register middleware
    from poi_api.middleware import register_middleware
    register_middleware(app)

    from poi_api.bootstrap import register_commands
    register_commands(app)

    # Liveness only; no database access
    @app.route('/health')
    def health():
        return {'status': 'ok'}

    return app
