"""Error taxonomy and JSON error handlers."""
import logging

from flask import current_app, g, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map onto an HTTP response."""

    code = 'INTERNAL_SERVER_ERROR'
    status_code = 500
    message = 'Internal Server Error'

    def __init__(self, message=None, detail=None):
        self.message = message or self.message
        # Underlying cause, only shown to clients when error details are exposed
        self.detail = detail
        super().__init__(self.message)


class InvalidParameters(APIError):
    """Malformed or missing request input."""

    code = 'INVALID_PARAMETERS'
    status_code = 400
    message = 'Invalid request parameters'


class InvalidCoordinates(APIError):
    """Coordinates outside the valid geographic range."""

    code = 'INVALID_COORDINATES'
    status_code = 400
    message = 'lat must be within [-90, 90] and lng within [-180, 180]'


class NotFound(APIError):
    code = 'NOT_FOUND'
    status_code = 404
    message = 'POI not found'


class SpatialCapabilityUnavailable(APIError):
    """PostGIS is not installed or not reachable in the configured database."""

    code = 'SPATIAL_CAPABILITY_UNAVAILABLE'
    status_code = 500
    message = 'Spatial extension (PostGIS) is not available'


class StoreFailure(APIError):
    """Generic database failure (network, timeout, bad SQL)."""

    code = 'STORE_FAILURE'
    status_code = 500
    message = 'Database operation failed'


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""


class BootstrapError(Exception):
    """Raised when the database cannot be prepared for serving."""


def _error_body(code, message):
    return {
        'code': code,
        'message': message,
        'requestId': g.get('request_id')
    }


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(APIError)
    def api_error(error):
        message = error.message
        if error.status_code >= 500 and error.detail and current_app.config.get('EXPOSE_ERROR_DETAILS'):
            message = error.detail
        return jsonify(_error_body(error.code, message)), error.status_code

    @app.errorhandler(404)
    def route_not_found(error):
        return jsonify(_error_body('ROUTE_NOT_FOUND', 'Not Found')), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify(_error_body('METHOD_NOT_ALLOWED', str(error.description))), 405

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify(_error_body(
            'BAD_REQUEST',
            str(error.description) if hasattr(error, 'description') else 'Invalid request'
        )), 400

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify(_error_body(error.name.upper().replace(' ', '_'), error.description)), error.code

        logger.exception('Unhandled error')
        if current_app.config.get('EXPOSE_ERROR_DETAILS'):
            message = str(error) or 'Internal Server Error'
        else:
            message = 'Internal Server Error'
        return jsonify(_error_body('INTERNAL_SERVER_ERROR', message)), 500
