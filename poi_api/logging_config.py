"""Logging configuration."""
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


def configure_logging(app) -> None:
    """Send poi_api logs to stdout at the configured level."""
    level_name = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    level = LOG_LEVELS.get(level_name, logging.INFO)

    package_logger = logging.getLogger('poi_api')
    package_logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.propagate = False

    app.logger.setLevel(level)
