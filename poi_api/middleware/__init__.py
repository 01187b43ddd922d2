"""Middleware for request handling."""
import logging
import time
import uuid
from flask import g, request

logger = logging.getLogger('poi_api.access')


def register_middleware(app):
    """Register middleware functions."""

    @app.before_request
    def add_request_id():
        """Add a unique request ID to each request."""
        request_id = request.headers.get('X-Request-ID')
        if not request_id:
            request_id = str(uuid.uuid4())
        g.request_id = request_id
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        """One access log line per request."""
        started = g.get('request_started')
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        logger.info(
            '%s %s %s %.1f ms',
            request.method, request.full_path.rstrip('?'), response.status_code, elapsed_ms
        )
        return response

    @app.after_request
    def add_request_id_header(response):
        """Add request ID to response headers."""
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id
        return response

    @app.after_request
    def add_cors_headers(response):
        """Add permissive CORS headers."""
        if app.config.get('CORS_ENABLED'):
            response.headers['Access-Control-Allow-Origin'] = '*'
            response.headers['Access-Control-Allow-Headers'] = 'Content-Type, X-Request-ID'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
            response.headers['Access-Control-Expose-Headers'] = 'X-Request-ID'
        return response
